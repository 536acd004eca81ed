#!/usr/bin/env python3
"""
Custom token issuance via the Firebase Admin SDK.

A named app is initialized from the service account for each run and deleted
again once the token has been created, whether or not creation succeeded.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import firebase_admin
from firebase_admin import auth, credentials

from firebase_test_env import constants
from firebase_test_env.config.exceptions import TokenIssuanceException

logger = logging.getLogger(__name__)


def clean_project_id(project_id: str) -> str:
    """Remove the firebase- prefix some project ids carry."""
    return project_id.replace('firebase-', '', 1)


def database_url(project_id: str) -> str:
    """Realtime Database URL for a project."""
    return f"https://{clean_project_id(project_id)}.firebaseio.com"


def token_issuance_error(uid: str, error: Exception) -> TokenIssuanceException:
    """Log a failed token request and build the exception raised for it."""
    reason = str(error) or repr(error)
    logger.error(f"Custom token could not be generated for uid: {uid} {reason}")
    return TokenIssuanceException(
        f"Custom token could not be generated for uid: {uid}: {reason}",
        uid=uid
    )


@contextmanager
def firebase_app(credential: Dict[str, Any], project_id: str,
                 name: str = constants.FIREBASE_APP_NAME) -> Iterator[firebase_admin.App]:
    """
    Initialize a named Firebase app from a service account.

    The app is deleted on exit so repeated runs in one process never collide
    on the app name.

    Args:
        credential: Service account dict
        project_id: Firebase project id used to build the database URL
        name: Firebase app name
    """
    app = firebase_admin.initialize_app(
        credentials.Certificate(credential),
        {'databaseURL': database_url(project_id)},
        name=name
    )
    logger.debug(f"Initialized Firebase app '{name}' for {database_url(project_id)}")
    try:
        yield app
    finally:
        firebase_admin.delete_app(app)
        logger.debug(f"Deleted Firebase app '{name}'")


def issue_custom_token(credential: Dict[str, Any], project_id: str, uid: str,
                       claims: Optional[Dict[str, Any]] = None) -> str:
    """
    Create a custom auth token for a test user.

    Args:
        credential: Validated service account dict
        project_id: Firebase project id
        uid: UID of the test user the token is issued for
        claims: Extra claims (defaults to TESTING_CLAIMS)

    Returns:
        str: The custom token

    Raises:
        TokenIssuanceException: If the app cannot be initialized or the token cannot be created
    """
    if claims is None:
        claims = dict(constants.TESTING_CLAIMS)

    try:
        with firebase_app(credential, project_id) as app:
            token = auth.create_custom_token(uid, claims, app=app)
    except Exception as e:
        raise token_issuance_error(uid, e) from e

    if isinstance(token, bytes):
        token = token.decode('utf-8')
    return token
