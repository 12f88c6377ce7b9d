"""
Client Configuration Module.

Handles the REST client's connection settings:
- ClientSettings built in code or from environment variables.
- YAML/JSON settings files validated against a bundled JSON schema.
"""

from remote_config.config.loader import ConfigurationError, SettingsLoader
from remote_config.config.schema_registry import SchemaRegistry, SchemaValidationError
from remote_config.config.settings import ClientSettings

__all__ = [
    "ClientSettings",
    "ConfigurationError",
    "SchemaRegistry",
    "SchemaValidationError",
    "SettingsLoader",
]
