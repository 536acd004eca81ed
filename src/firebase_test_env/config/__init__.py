"""
Configuration for test env file generation.

Settings, environment lookup, identifier resolution and service account handling.
"""

from .env import EnvironmentSource, build_raw_environment, get_env_prefix, load_project_registry
from .settings import GeneratorSettings, load_settings
from .resolution import resolve_identifiers
from .credentials import resolve_service_account, validate_service_account, missing_fields
from .models import InvocationContext, ResolvedIdentifiers, OutputConfig

__all__ = [
    'EnvironmentSource',
    'build_raw_environment',
    'get_env_prefix',
    'load_project_registry',
    'GeneratorSettings',
    'load_settings',
    'resolve_identifiers',
    'resolve_service_account',
    'validate_service_account',
    'missing_fields',
    'InvocationContext',
    'ResolvedIdentifiers',
    'OutputConfig',
]
