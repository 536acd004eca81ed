"""
Service account resolution and validation.

The service account is taken from the first source that provides one:
1. SERVICE_ACCOUNT variable holding the key file's JSON
2. The local serviceAccount.json (outside CI only)
3. Individual SERVICE_ACCOUNT_* variables
"""
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from firebase_test_env import constants
from .env import EnvironmentSource, load_local_config
from .exceptions import IncompleteCredentialException, LocalConfigException

logger = logging.getLogger(__name__)


def _from_variables(source: EnvironmentSource) -> Dict[str, Any]:
    client_email = source.get('SERVICE_ACCOUNT_CLIENT_EMAIL')
    private_key = source.get('SERVICE_ACCOUNT_PRIVATE_KEY')
    if private_key:
        # Keys pasted into CI settings usually carry literal \n sequences
        private_key = private_key.replace('\\n', '\n')

    return {
        'type': 'service_account',
        'project_id': source.get('FIREBASE_PROJECT_ID'),
        'private_key_id': source.get('SERVICE_ACCOUNT_PRIVATE_KEY_ID'),
        'private_key': private_key,
        'client_email': client_email,
        'client_id': source.get('SERVICE_ACCOUNT_CLIENT_ID'),
        'auth_uri': constants.GOOGLE_AUTH_URI,
        'token_uri': constants.GOOGLE_TOKEN_URI,
        'auth_provider_x509_cert_url': constants.GOOGLE_CERTS_URL,
        'client_x509_cert_url': source.get('SERVICE_ACCOUNT_CERT_URL'),
    }


def _load_service_account_source(source: EnvironmentSource, service_account_path: Path) -> Dict[str, Any]:
    raw_json = source.get('SERVICE_ACCOUNT')
    if raw_json:
        try:
            data = json.loads(raw_json)
        except json.JSONDecodeError as e:
            raise LocalConfigException(f"SERVICE_ACCOUNT is not valid JSON: {e}", path='SERVICE_ACCOUNT') from e
        if not isinstance(data, dict):
            raise LocalConfigException("SERVICE_ACCOUNT must be a JSON object", path='SERVICE_ACCOUNT')
        logger.debug("Using service account from SERVICE_ACCOUNT variable")
        return data

    if not source.is_ci() and service_account_path.exists():
        logger.debug(f"Using service account from {service_account_path}")
        return load_local_config(service_account_path)

    logger.debug("Building service account from SERVICE_ACCOUNT_* variables")
    return _from_variables(source)


def resolve_service_account(source: EnvironmentSource, service_account_path: Path) -> Dict[str, Any]:
    """
    Resolve the service account for a run.

    Args:
        source: Environment source for the run
        service_account_path: Location of the local service account file

    Returns:
        Dict keyed by SERVICE_ACCOUNT_FIELDS (in order) followed by any extra
        keys from the source. Fields the source lacks are None.
    """
    data = _load_service_account_source(source, Path(service_account_path))

    credential = {field: data.get(field) for field in constants.SERVICE_ACCOUNT_FIELDS}
    for key, value in data.items():
        if key not in credential:
            credential[key] = value
    return credential


def missing_fields(credential: Dict[str, Any]) -> List[str]:
    """Names of credential fields with no value, in key order."""
    return [key for key, value in credential.items() if value is None]


def validate_service_account(credential: Dict[str, Any], env_name: Optional[str] = None) -> None:
    """
    Raise IncompleteCredentialException if any credential field is missing.
    """
    missing = missing_fields(credential)
    if missing:
        raise IncompleteCredentialException(
            f"Service Account is missing parameters: {', '.join(missing)}",
            missing_fields=missing,
            env_name=env_name
        )
