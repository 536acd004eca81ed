"""
Identifier resolution for a generator run.
"""
import logging
from typing import Any, Mapping, Optional

from firebase_test_env import constants
from .env import EnvironmentSource, project_from_registry
from .exceptions import MissingIdentifierException
from .models import ResolvedIdentifiers

logger = logging.getLogger(__name__)


def resolve_identifiers(
    env_name: str,
    raw_environment: Mapping[str, str],
    registry: Optional[Mapping[str, Any]] = None,
    local_config_path: str = f"{constants.DEFAULT_TEST_FOLDER_PATH}/{constants.LOCAL_CONFIG_FILE_NAME}",
) -> ResolvedIdentifiers:
    """
    Resolve the test user UID and Firebase project id.

    Args:
        env_name: Environment name (local, stage, prod, ...)
        raw_environment: Variables for the run
        registry: Parsed .firebaserc contents
        local_config_path: Local config file named in the error when the UID is missing

    Returns:
        ResolvedIdentifiers

    Raises:
        MissingIdentifierException: If neither <PREFIX>TEST_UID nor TEST_UID is set
    """
    source = EnvironmentSource(raw_environment, env_name)

    uid = source.get('TEST_UID')
    if not uid:
        variable_name = f"{source.prefix}TEST_UID"
        raise MissingIdentifierException(
            f"{variable_name} is missing from environment. Confirm that {local_config_path} "
            f"contains either {variable_name} or TEST_UID.",
            variable_name=variable_name,
            local_config_path=str(local_config_path),
            env_name=env_name
        )

    project_id = source.get('FIREBASE_PROJECT_ID') or project_from_registry(registry or {}, env_name)
    if not project_id:
        # Left permissive: an empty id shows up later as a mismatch warning
        logger.warning(f"No Firebase project id found for environment '{env_name}'")

    return ResolvedIdentifiers(uid=uid, project_id=project_id)
