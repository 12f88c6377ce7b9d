"""
Remote Config Admin Client.

Typed client for managing a project's Remote Config template:
- Service: fetch, validate, publish, roll back and list template versions.
- Models: validating Template and Version wrappers.
- API Client: REST transport for the Remote Config service.
- Configuration: client settings from code, environment or YAML/JSON files.
"""

__version__ = "0.1.0"

from remote_config.config import ClientSettings, ConfigurationError, SettingsLoader
from remote_config.errors import RemoteConfigError
from remote_config.models import ListVersionsOptions, ListVersionsResult, Template, Version
from remote_config.api_client import RemoteConfigApiClient
from remote_config.service import RemoteConfig

__all__ = [
    "ClientSettings",
    "ConfigurationError",
    "ListVersionsOptions",
    "ListVersionsResult",
    "RemoteConfig",
    "RemoteConfigApiClient",
    "RemoteConfigError",
    "SettingsLoader",
    "Template",
    "Version",
]
