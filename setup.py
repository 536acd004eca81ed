import re
from pathlib import Path
from setuptools import setup, find_packages

VERSION = re.search(
    r"^__version__ = '([^']+)'",
    (Path(__file__).parent / 'src' / 'firebase_test_env' / '__init__.py').read_text(),
    re.M
).group(1)

setup(
    name='firebase-test-env',
    version=VERSION,
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    description='Generates end-to-end test env files with Firebase custom auth tokens.',
    author='Your Name',
    author_email='youremail@example.com',
    python_requires='>=3.8',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'firebase-admin>=5.0.0',
        'pydantic>=2.0.0',
    ],
    extras_require={
        'test': ['pytest>=7.0.0'],
    },
    entry_points={
        'console_scripts': [
            'firebase-test-env = firebase_test_env.cli:main',
        ],
    },
)
