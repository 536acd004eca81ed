"""
Fixed names and paths shared by the test env file generator.
"""
DEFAULT_TEST_ENV_FILE_NAME = "cypress.env.json"
DEFAULT_SERVICE_ACCOUNT_PATH = "serviceAccount.json"
DEFAULT_TEST_FOLDER_PATH = "test/e2e"
LOCAL_CONFIG_FILE_NAME = "config.json"
FIREBASE_REGISTRY_FILE = ".firebaserc"
SETTINGS_FILE_NAME = "test-env.yaml"

DEFAULT_ENV_NAME = "local"

# Key order here is the order missing fields are reported in
SERVICE_ACCOUNT_FIELDS = (
    "type",
    "project_id",
    "private_key_id",
    "private_key",
    "client_email",
    "client_id",
    "auth_uri",
    "token_uri",
    "auth_provider_x509_cert_url",
    "client_x509_cert_url",
)

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v1/certs"

TESTING_CLAIMS = {"isTesting": True}
FIREBASE_APP_NAME = "withServiceAccount"
