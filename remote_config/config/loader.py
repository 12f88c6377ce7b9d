"""
Settings Loader Module.

Loads Remote Config client settings from YAML or JSON files:
- Parses the file (PyYAML / json).
- Validates it against the bundled JSON schema.
- Caches parsed files by resolved path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from remote_config.config.schema_registry import SchemaRegistry
from remote_config.config.settings import ClientSettings

SETTINGS_SCHEMA = "client_settings_schema"


class ConfigurationError(Exception):
    """Raised when a settings file is invalid or cannot be loaded."""

    pass


class SettingsLoader:
    """
    Loader for client settings files with schema validation and caching.

    Attributes:
        config_dir: Base directory for settings files.
        schema_registry: Registry of JSON schemas for validation.

    Usage::

        loader = SettingsLoader(config_dir="config")
        settings = loader.load_settings("remote_config.yaml")
        remote_config = RemoteConfig(settings=settings)
    """

    SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}

    def __init__(
        self,
        config_dir: str | Path = "config",
        schema_dir: str | Path | None = None,
    ) -> None:
        """
        Initialize the settings loader.

        Args:
            config_dir: Directory searched first for settings files.
            schema_dir: Directory of JSON schema files. Defaults to the
                        schemas bundled with the package.
        """
        self.config_dir = Path(config_dir)
        self.schema_registry = SchemaRegistry(schema_dir)
        self._cache: Dict[str, Dict[str, Any]] = {}

        logger.info(f"SettingsLoader initialized, config_dir={self.config_dir}")

    def load(
        self,
        filename: str,
        schema_name: Optional[str] = SETTINGS_SCHEMA,
        *,
        validate: bool = True,
        use_cache: bool = True,
    ) -> Dict[str, Any]:
        """
        Load a settings file with optional schema validation.

        Args:
            filename: Name or relative path of the file within config_dir.
            schema_name: Schema to validate against (without extension).
            validate: Whether to validate against the schema.
            use_cache: Whether to return a previously parsed copy.

        Returns:
            Parsed settings as a dictionary.

        Raises:
            ConfigurationError: If the file cannot be parsed or fails validation.
            FileNotFoundError: If the file does not exist.
        """
        file_path = self._resolve_path(filename)
        cache_key = str(file_path.resolve())

        if use_cache and cache_key in self._cache:
            logger.debug(f"Returning cached settings for: {filename}")
            return self._cache[cache_key]

        logger.info(f"Loading settings: {file_path}")
        data = self._read_file(file_path)

        if validate and schema_name:
            self._validate(data, schema_name)

        if use_cache:
            self._cache[cache_key] = data

        return data

    def load_settings(self, filename: str = "remote_config.yaml") -> ClientSettings:
        """
        Load and validate a settings file into ClientSettings.

        Args:
            filename: Settings filename (default: remote_config.yaml).
        """
        return ClientSettings.from_dict(self.load(filename, SETTINGS_SCHEMA))

    def clear_cache(self) -> None:
        """Clear all cached settings."""
        self._cache.clear()
        logger.debug("Settings cache cleared.")

    def _resolve_path(self, filename: str) -> Path:
        """Resolve a filename to a full path, checking config_dir first."""
        path = Path(filename)
        if path.is_absolute() and path.exists():
            return path

        config_path = self.config_dir / filename
        if config_path.exists():
            return config_path

        if path.exists():
            return path

        raise FileNotFoundError(
            f"Settings file not found: {filename} "
            f"(searched in {self.config_dir} and current directory)"
        )

    def _read_file(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML or JSON file into a mapping."""
        suffix = file_path.suffix.lower()
        if suffix not in self.SUPPORTED_EXTENSIONS:
            raise ConfigurationError(
                f"Unsupported file format '{suffix}'. "
                f"Supported: {sorted(self.SUPPORTED_EXTENSIONS)}"
            )

        try:
            content = file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read file {file_path}: {e}") from e

        try:
            if suffix in {".yaml", ".yml"}:
                data = yaml.safe_load(content)
            else:
                data = json.loads(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to parse {file_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Settings file must contain a mapping, "
                f"got {type(data).__name__}: {file_path}"
            )

        return data

    def _validate(self, data: Dict[str, Any], schema_name: str) -> None:
        try:
            self.schema_registry.validate(data, schema_name)
        except Exception as e:
            raise ConfigurationError(
                f"Settings validation failed against schema '{schema_name}': {e}"
            ) from e
