"""
Exception classes with built-in guidance for test env file generation.
"""
import sys


class TestEnvException(Exception):
    """Base exception for all test env file errors."""
    # Keep pytest from collecting this as a test class
    __test__ = False

    def __init__(self, message: str, env_name: str = None, variable_name: str = None):
        super().__init__(message)
        self.env_name = env_name
        self.variable_name = variable_name
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            else:
                return executable
        return "unknown command"

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Test env error: {self}
💡 Check your configuration and try again
"""


class MissingIdentifierException(TestEnvException):
    """Raised when the test user UID is not available for the environment."""
    def __init__(self, message: str, variable_name: str, local_config_path: str, env_name: str = None):
        self.local_config_path = local_config_path
        super().__init__(message, env_name=env_name, variable_name=variable_name)

    def _generate_guidance(self):
        return f"""
❌ {self.variable_name} is not set
💡 Resolve this in one of the following ways:
   1. Export it: export {self.variable_name}=<uid of your test user>
   2. Or add {self.variable_name} (or TEST_UID) to {self.local_config_path}
"""


class IncompleteCredentialException(TestEnvException):
    """Raised when the service account is missing one or more required fields."""
    def __init__(self, message: str, missing_fields: list, env_name: str = None):
        self.missing_fields = list(missing_fields)
        super().__init__(message, env_name=env_name)

    def _generate_guidance(self):
        return f"""
❌ Service account is incomplete
Missing fields: {', '.join(self.missing_fields)}
💡 Resolve this in one of the following ways:
   1. Download a service account key from the Firebase console into serviceAccount.json
   2. Or set SERVICE_ACCOUNT to the key's JSON content
   3. Or set the SERVICE_ACCOUNT_* variables for each missing field
"""


class TokenIssuanceException(TestEnvException):
    """Raised when Firebase Auth fails to create a custom token."""
    def __init__(self, message: str, uid: str, env_name: str = None):
        self.uid = uid
        super().__init__(message, env_name=env_name)

    def _generate_guidance(self):
        return f"""
❌ Custom token could not be generated for uid: {self.uid}
💡 Confirm the service account belongs to the target project and has not been revoked
"""


class LocalConfigException(TestEnvException):
    """Raised when a local JSON config file exists but cannot be parsed."""
    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(message)

    def _generate_guidance(self):
        return f"""
❌ Could not read {self.path}: {self}
💡 Fix the JSON syntax in {self.path} or remove the file
"""


class SettingsFileException(TestEnvException):
    """Raised when test-env.yaml exists but does not contain a valid mapping."""
    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(message)

    def _generate_guidance(self):
        command = self._get_current_command()
        return f"""
❌ Invalid settings file {self.path}: {self}
💡 Fix or remove {self.path}, then rerun: {command}
"""
