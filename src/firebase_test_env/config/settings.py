"""
Generator settings.

Paths used by the generator default to the values in constants and can be
overridden per project with a test-env.yaml file in the working directory:

    base-path: .
    test-env-file: cypress.env.json
    service-account-file: serviceAccount.json
    test-folder: test/e2e
"""
import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field

from firebase_test_env import constants
from .exceptions import SettingsFileException

logger = logging.getLogger(__name__)

# YAML key -> model field
_SETTINGS_KEYS = {
    'base-path': 'base_path',
    'test-env-file': 'test_env_file_name',
    'service-account-file': 'service_account_file_name',
    'test-folder': 'test_folder_path',
}


class GeneratorSettings(BaseModel):
    """File locations used by a single generator run."""
    base_path: Path = Field(default_factory=Path.cwd)
    test_env_file_name: str = constants.DEFAULT_TEST_ENV_FILE_NAME
    service_account_file_name: str = constants.DEFAULT_SERVICE_ACCOUNT_PATH
    test_folder_path: str = constants.DEFAULT_TEST_FOLDER_PATH

    @property
    def test_env_file_path(self) -> Path:
        return self.base_path / self.test_env_file_name

    @property
    def service_account_path(self) -> Path:
        return self.base_path / self.service_account_file_name

    @property
    def local_config_path(self) -> Path:
        return self.base_path / self.test_folder_path / constants.LOCAL_CONFIG_FILE_NAME

    @property
    def registry_path(self) -> Path:
        return self.base_path / constants.FIREBASE_REGISTRY_FILE


def load_settings(path: Optional[Union[str, Path]] = None) -> GeneratorSettings:
    """
    Load generator settings from test-env.yaml.

    Args:
        path: Settings file to read (defaults to test-env.yaml in the working directory)

    Returns:
        GeneratorSettings with file values applied over the defaults

    Raises:
        SettingsFileException: If the file exists but is not a valid YAML mapping
    """
    settings_path = Path(path) if path else Path.cwd() / constants.SETTINGS_FILE_NAME

    if not settings_path.exists():
        logger.debug(f"{settings_path} not found, using default settings")
        return GeneratorSettings()

    try:
        with open(settings_path, 'r') as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SettingsFileException(f"Could not parse YAML: {e}", path=str(settings_path)) from e

    if not isinstance(data, dict):
        raise SettingsFileException("Settings file must contain a mapping", path=str(settings_path))

    unknown = sorted(set(data) - set(_SETTINGS_KEYS))
    if unknown:
        raise SettingsFileException(f"Unknown settings: {', '.join(unknown)}", path=str(settings_path))

    values = {_SETTINGS_KEYS[key]: value for key, value in data.items() if value is not None}
    if 'base_path' in values:
        base_path = Path(values['base_path'])
        if not base_path.is_absolute():
            base_path = settings_path.parent / base_path
        values['base_path'] = base_path

    logger.debug(f"Loaded settings from {settings_path}: {values}")
    return GeneratorSettings(**values)
