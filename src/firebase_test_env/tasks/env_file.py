"""Test env tasks - generates the end-to-end test config file with a fresh custom auth token.
"""

import sys
from invoke import task
from invoke.exceptions import Exit

from firebase_test_env import constants
from firebase_test_env.config.exceptions import TestEnvException
from firebase_test_env.config.logging import bootstrap_logging
from firebase_test_env.config.models import InvocationContext
from firebase_test_env.generator import create_test_env_file as generate


@task(
    positional=['env_name'],
    aliases=['createTestEnvFile'],
    help={
        'env_name': 'Environment to build the file for (local, stage, prod, ...). Defaults to local.',
        'debug': 'Enable debug logging'
    }
)
def create_test_env_file(ctx, env_name=constants.DEFAULT_ENV_NAME, debug=False):
    """
    Build configuration file containing a token for authorizing a firebase instance.

    Examples:
        firebase-test-env create-test-env-file            # local
        firebase-test-env create-test-env-file stage      # uses STAGE_ prefixed variables
    """
    bootstrap_logging(debug=debug)
    context = InvocationContext.from_arg(env_name)

    try:
        generate(context.env_name)
    except TestEnvException as e:
        print(f"❌ Test env file could not be created:\n{e}", file=sys.stderr)
        print(e.guidance, file=sys.stderr)
        raise Exit(code=1)
    except Exception as e:
        print(f"❌ Test env file could not be created:\n{e}", file=sys.stderr)
        raise Exit(code=1)
