"""
Explicit environment source for the generator.

Variables are read from a plain mapping built once at the CLI boundary, so the
resolution code never touches os.environ directly. Outside CI, the local
test config file (test/e2e/config.json) supplies values that process
variables can override.
"""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from firebase_test_env import constants
from .exceptions import LocalConfigException

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ('1', 'true', 'yes')


def get_env_prefix(env_name: Optional[str]) -> str:
    """
    Get the variable prefix for an environment.

    Examples:
        get_env_prefix('local')    -> ''
        get_env_prefix('stage')    -> 'STAGE_'
        get_env_prefix('int-test') -> 'INT_TEST_'
    """
    if not env_name or env_name == constants.DEFAULT_ENV_NAME:
        return ''
    return f"{env_name.upper().replace('-', '_')}_"


def is_ci(environ: Mapping[str, str]) -> bool:
    """Check whether the CI variable marks this as a CI run."""
    return environ.get('CI', '').strip().lower() in TRUTHY_VALUES


def _read_json_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.debug(f"{path} not found")
        return {}

    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise LocalConfigException(f"Invalid JSON: {e}", path=str(path)) from e

    if not isinstance(data, dict):
        raise LocalConfigException("Expected a JSON object", path=str(path))
    return data


def load_local_config(path: Union[str, Path]) -> Dict[str, Any]:
    """Load the local per-environment config file, returning {} if it is absent."""
    return _read_json_file(Path(path))


def load_project_registry(path: Union[str, Path]) -> Dict[str, Any]:
    """Load the Firebase project registry (.firebaserc), returning {} if it is absent."""
    return _read_json_file(Path(path))


def project_from_registry(registry: Mapping[str, Any], env_name: str) -> str:
    """Get the project id for an environment from the registry, then its default entry."""
    projects = registry.get('projects') or {}
    if not isinstance(projects, dict):
        raise LocalConfigException(
            'Expected "projects" to be an object mapping environments to project ids',
            path=constants.FIREBASE_REGISTRY_FILE
        )
    return projects.get(env_name) or projects.get('default') or ''


def build_raw_environment(
    environ: Optional[Mapping[str, str]] = None,
    local_config_path: Optional[Union[str, Path]] = None,
) -> Dict[str, str]:
    """
    Build the variable mapping used for a run.

    Args:
        environ: Process variables (defaults to os.environ)
        local_config_path: Local config file layered under process variables outside CI

    Returns:
        Flat dict of variable name to value
    """
    if environ is None:
        environ = os.environ

    raw: Dict[str, str] = {}
    if local_config_path and not is_ci(environ):
        for key, value in load_local_config(local_config_path).items():
            if value is not None:
                raw[key] = value if isinstance(value, str) else json.dumps(value)
        logger.debug(f"Loaded {len(raw)} values from {local_config_path}")

    raw.update(environ)
    return raw


class EnvironmentSource:
    """Prefixed variable lookup over a raw environment mapping."""

    def __init__(self, raw: Mapping[str, str], env_name: str = constants.DEFAULT_ENV_NAME):
        self.raw = raw
        self.env_name = env_name
        self.prefix = get_env_prefix(env_name)

    def get(self, name: str) -> Optional[str]:
        """Get <PREFIX><name>, falling back to <name>. Empty values count as unset."""
        for key in (f"{self.prefix}{name}", name):
            value = self.raw.get(key)
            if value:
                return value
        return None

    def is_ci(self) -> bool:
        return is_ci(self.raw)
