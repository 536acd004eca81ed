"""
Test env file generation.

Builds the JSON file the end-to-end test runner reads (cypress.env.json by
default) from the resolved environment and a freshly issued Firebase custom
token, and saves the service account next to it for reporters.
"""
import json
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from . import constants
from .auth.tokens import issue_custom_token, token_issuance_error
from .config.credentials import resolve_service_account, validate_service_account
from .config.env import EnvironmentSource, build_raw_environment, load_project_registry
from .config.exceptions import TokenIssuanceException
from .config.models import InvocationContext, OutputConfig
from .config.resolution import resolve_identifiers
from .config.settings import GeneratorSettings, load_settings

logger = logging.getLogger(__name__)

TokenIssuer = Callable[[Dict[str, Any], str, str, Dict[str, Any]], str]


def _issue_token(token_issuer: TokenIssuer, credential: Dict[str, Any], project_id: str, uid: str) -> str:
    try:
        return token_issuer(credential, project_id, uid, dict(constants.TESTING_CLAIMS))
    except TokenIssuanceException:
        raise
    except Exception as e:
        raise token_issuance_error(uid, e) from e


def create_test_env_file(
    env_name: str = constants.DEFAULT_ENV_NAME,
    environ: Optional[Mapping[str, str]] = None,
    settings: Optional[GeneratorSettings] = None,
    token_issuer: TokenIssuer = issue_custom_token,
) -> str:
    """
    Generate the test env file for an environment.

    Args:
        env_name: Environment name (local, stage, prod, ...)
        environ: Process variables (defaults to os.environ)
        settings: File locations (defaults to load_settings())
        token_issuer: Callable creating the custom token

    Returns:
        str: The issued custom token

    Raises:
        MissingIdentifierException: If TEST_UID is not available
        IncompleteCredentialException: If the service account lacks required fields
        TokenIssuanceException: If Firebase fails to create the token
    """
    context = InvocationContext.from_arg(env_name)
    env_name = context.env_name
    if settings is None:
        settings = load_settings()

    raw_environment = build_raw_environment(environ, settings.local_config_path)
    registry = load_project_registry(settings.registry_path)
    local_config_display = f"{settings.test_folder_path}/{constants.LOCAL_CONFIG_FILE_NAME}"

    identifiers = resolve_identifiers(env_name, raw_environment, registry, local_config_display)
    logger.info(f"Generating custom auth token for Firebase project with projectId: {identifiers.project_id}")

    source = EnvironmentSource(raw_environment, env_name)
    service_account = resolve_service_account(source, settings.service_account_path)
    validate_service_account(service_account, env_name=env_name)

    if service_account.get('project_id') != identifiers.project_id:
        logger.warning(
            f"project_id {service_account.get('project_id')} does not match env var: {identifiers.project_id}"
        )

    token = _issue_token(token_issuer, service_account, identifiers.project_id, identifiers.uid)
    logger.info(f"✅ Custom token generated successfully, writing to {settings.test_env_file_name}")

    output = OutputConfig(
        TEST_UID=identifiers.uid,
        FIREBASE_API_KEY=source.get('FIREBASE_API_KEY'),
        FIREBASE_PROJECT_ID=identifiers.project_id,
        FIREBASE_AUTH_JWT=token,
    )
    stage_project_id = source.get('STAGE_FIREBASE_PROJECT_ID')
    if stage_project_id:
        output.STAGE_FIREBASE_PROJECT_ID = stage_project_id
        output.STAGE_FIREBASE_API_KEY = source.get('STAGE_FIREBASE_API_KEY')

    settings.test_env_file_path.parent.mkdir(parents=True, exist_ok=True)
    settings.test_env_file_path.write_text(output.to_json())
    logger.info(f"✅ {settings.test_env_file_name} updated successfully")

    # Kept for reporters; never overwritten once present
    if not settings.service_account_path.exists():
        settings.service_account_path.write_text(json.dumps(service_account, indent=2))
        logger.info(f"✅ {settings.service_account_file_name} created successfully")

    return token
