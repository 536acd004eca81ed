"""
Pydantic models for a single generator run.
"""
import json
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict

from firebase_test_env import constants


class InvocationContext(BaseModel):
    """The environment a run was invoked for."""
    model_config = ConfigDict(frozen=True)

    env_name: str = constants.DEFAULT_ENV_NAME

    @classmethod
    def from_arg(cls, env_arg: Any) -> 'InvocationContext':
        """Create from a raw CLI argument, falling back to local for anything but a non-empty string."""
        if isinstance(env_arg, str) and env_arg:
            return cls(env_name=env_arg)
        return cls()


class ResolvedIdentifiers(BaseModel):
    """Test user UID and Firebase project id resolved for a run."""
    model_config = ConfigDict(frozen=True)

    uid: str
    project_id: str


class OutputConfig(BaseModel):
    """Contents of the test env file."""
    TEST_UID: str
    FIREBASE_API_KEY: Optional[str] = None
    FIREBASE_PROJECT_ID: str
    FIREBASE_AUTH_JWT: str
    STAGE_FIREBASE_PROJECT_ID: Optional[str] = None
    STAGE_FIREBASE_API_KEY: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Field dict without unset values; no stage project means no stage fields."""
        data = self.model_dump(exclude_none=True)
        if not self.STAGE_FIREBASE_PROJECT_ID:
            data.pop('STAGE_FIREBASE_PROJECT_ID', None)
            data.pop('STAGE_FIREBASE_API_KEY', None)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)
