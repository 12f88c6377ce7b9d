"""
Client Settings.

Connection settings for the Remote Config REST client.
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

DEFAULT_BASE_URL = "https://firebaseremoteconfig.googleapis.com"

PROJECT_ID_ENV_VARS = ("GOOGLE_CLOUD_PROJECT", "GCLOUD_PROJECT")
ACCESS_TOKEN_ENV_VAR = "REMOTE_CONFIG_ACCESS_TOKEN"


@dataclass
class ClientSettings:
    """Configuration for the Remote Config REST client."""

    project_id: str = ""
    access_token: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout_sec: float = 30
    verify_ssl: bool = True

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientSettings":
        """
        Build settings from environment variables.

        The project id is read from GOOGLE_CLOUD_PROJECT, then GCLOUD_PROJECT;
        the access token from REMOTE_CONFIG_ACCESS_TOKEN.
        """
        env = os.environ if environ is None else environ
        project_id = next((env[k] for k in PROJECT_ID_ENV_VARS if env.get(k)), "")
        return cls(project_id=project_id, access_token=env.get(ACCESS_TOKEN_ENV_VAR, ""))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ClientSettings":
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
