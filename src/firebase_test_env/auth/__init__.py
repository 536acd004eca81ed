"""
Firebase Auth token issuance.
"""

from .tokens import issue_custom_token, token_issuance_error, firebase_app, database_url, clean_project_id

__all__ = ['issue_custom_token', 'token_issuance_error', 'firebase_app', 'database_url', 'clean_project_id']
