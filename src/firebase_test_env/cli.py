"""
Command line entry point.

Exposes the package's invoke task collection as the firebase-test-env program:

    firebase-test-env create-test-env-file [env_name]
"""
from invoke import Program

from firebase_test_env import __version__, namespace

program = Program(namespace=namespace, name='firebase-test-env', version=__version__)


def main():
    program.run()
