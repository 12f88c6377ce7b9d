"""
Tests for the Client Configuration Module.

Covers:
- ClientSettings: defaults and environment variables.
- SettingsLoader: file loading, schema validation, caching.
- SchemaRegistry: bundled and custom schemas.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from remote_config.config import (
    ClientSettings,
    ConfigurationError,
    SchemaRegistry,
    SchemaValidationError,
    SettingsLoader,
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def sample_settings() -> dict:
    """Return a valid settings dictionary."""
    return {
        "project_id": "my-project",
        "access_token": "ya29.token",
        "timeout_sec": 10,
        "verify_ssl": False,
    }


# ---------------------------------------------------------------------------
# ClientSettings Tests
# ---------------------------------------------------------------------------


class TestClientSettings:
    """Tests for the ClientSettings dataclass."""

    def test_defaults(self) -> None:
        settings = ClientSettings(project_id="p")
        assert settings.base_url == "https://firebaseremoteconfig.googleapis.com"
        assert settings.timeout_sec == 30
        assert settings.verify_ssl is True
        assert settings.access_token == ""

    def test_from_env(self) -> None:
        settings = ClientSettings.from_env({
            "GCLOUD_PROJECT": "legacy-project",
            "REMOTE_CONFIG_ACCESS_TOKEN": "token",
        })
        assert settings.project_id == "legacy-project"
        assert settings.access_token == "token"

    def test_from_env_prefers_google_cloud_project(self) -> None:
        settings = ClientSettings.from_env({
            "GOOGLE_CLOUD_PROJECT": "primary",
            "GCLOUD_PROJECT": "legacy",
        })
        assert settings.project_id == "primary"

    def test_from_env_empty(self) -> None:
        settings = ClientSettings.from_env({})
        assert settings.project_id == ""

    def test_from_env_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "from-os")
        monkeypatch.delenv("REMOTE_CONFIG_ACCESS_TOKEN", raising=False)
        assert ClientSettings.from_env().project_id == "from-os"

    def test_dict_round_trip(self, sample_settings: dict) -> None:
        settings = ClientSettings.from_dict(sample_settings)
        assert ClientSettings.from_dict(settings.to_dict()) == settings


# ---------------------------------------------------------------------------
# SettingsLoader Tests
# ---------------------------------------------------------------------------


class TestSettingsLoader:
    """Tests for the SettingsLoader class."""

    def test_load_yaml_settings(self, tmp_config_dir: Path, sample_settings: dict) -> None:
        (tmp_config_dir / "remote_config.yaml").write_text(
            yaml.dump(sample_settings), encoding="utf-8"
        )

        settings = SettingsLoader(config_dir=tmp_config_dir).load_settings()

        assert settings.project_id == "my-project"
        assert settings.timeout_sec == 10
        assert settings.verify_ssl is False

    def test_load_json_settings(self, tmp_config_dir: Path, sample_settings: dict) -> None:
        (tmp_config_dir / "remote_config.json").write_text(
            json.dumps(sample_settings), encoding="utf-8"
        )

        settings = SettingsLoader(config_dir=tmp_config_dir).load_settings("remote_config.json")

        assert settings.access_token == "ya29.token"

    def test_load_file_not_found(self, tmp_config_dir: Path) -> None:
        loader = SettingsLoader(config_dir=tmp_config_dir)
        with pytest.raises(FileNotFoundError, match="Settings file not found"):
            loader.load("nonexistent.yaml")

    def test_load_unsupported_format(self, tmp_config_dir: Path) -> None:
        (tmp_config_dir / "settings.txt").write_text("project_id=p", encoding="utf-8")

        loader = SettingsLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="Unsupported file format"):
            loader.load("settings.txt")

    def test_load_invalid_yaml(self, tmp_config_dir: Path) -> None:
        (tmp_config_dir / "bad.yaml").write_text("key: [invalid yaml{", encoding="utf-8")

        loader = SettingsLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="Failed to parse"):
            loader.load("bad.yaml")

    def test_load_non_mapping(self, tmp_config_dir: Path) -> None:
        (tmp_config_dir / "list.yaml").write_text("- a\n- b\n", encoding="utf-8")

        loader = SettingsLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            loader.load("list.yaml")

    def test_missing_project_id_fails_validation(self, tmp_config_dir: Path) -> None:
        (tmp_config_dir / "remote_config.yaml").write_text(
            yaml.dump({"access_token": "t"}), encoding="utf-8"
        )

        loader = SettingsLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="validation failed"):
            loader.load_settings()

    def test_unknown_key_fails_validation(
        self, tmp_config_dir: Path, sample_settings: dict
    ) -> None:
        sample_settings["retries"] = 3
        (tmp_config_dir / "remote_config.yaml").write_text(
            yaml.dump(sample_settings), encoding="utf-8"
        )

        loader = SettingsLoader(config_dir=tmp_config_dir)
        with pytest.raises(ConfigurationError, match="validation failed"):
            loader.load_settings()

    def test_load_without_validation(self, tmp_config_dir: Path) -> None:
        (tmp_config_dir / "partial.yaml").write_text(
            yaml.dump({"timeout_sec": 5}), encoding="utf-8"
        )

        data = SettingsLoader(config_dir=tmp_config_dir).load("partial.yaml", validate=False)

        assert data == {"timeout_sec": 5}

    def test_load_with_caching(self, tmp_config_dir: Path, sample_settings: dict) -> None:
        (tmp_config_dir / "remote_config.yaml").write_text(
            yaml.dump(sample_settings), encoding="utf-8"
        )

        loader = SettingsLoader(config_dir=tmp_config_dir)
        result1 = loader.load("remote_config.yaml")
        result2 = loader.load("remote_config.yaml")

        assert result1 is result2

    def test_clear_cache(self, tmp_config_dir: Path, sample_settings: dict) -> None:
        (tmp_config_dir / "remote_config.yaml").write_text(
            yaml.dump(sample_settings), encoding="utf-8"
        )

        loader = SettingsLoader(config_dir=tmp_config_dir)
        result1 = loader.load("remote_config.yaml")
        loader.clear_cache()
        result2 = loader.load("remote_config.yaml")

        assert result1 is not result2
        assert result1 == result2


# ---------------------------------------------------------------------------
# SchemaRegistry Tests
# ---------------------------------------------------------------------------


class TestSchemaRegistry:
    """Tests for the SchemaRegistry class."""

    def test_bundled_schemas(self) -> None:
        registry = SchemaRegistry()
        assert "client_settings_schema" in registry.list_schemas()
        assert registry.get_schema("client_settings_schema")["type"] == "object"

    def test_validate_collects_all_errors(self) -> None:
        registry = SchemaRegistry()
        with pytest.raises(SchemaValidationError) as exc:
            registry.validate({"project_id": "", "timeout_sec": -1}, "client_settings_schema")
        assert len(exc.value.errors) == 2

    def test_schema_not_found(self, tmp_path: Path) -> None:
        registry = SchemaRegistry(tmp_path)
        with pytest.raises(FileNotFoundError, match="Schema not found"):
            registry.get_schema("missing")

    def test_invalid_schema_file(self, tmp_path: Path) -> None:
        (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
        registry = SchemaRegistry(tmp_path)
        with pytest.raises(SchemaValidationError, match="Failed to load schema"):
            registry.get_schema("broken")

    def test_list_schemas_missing_dir(self, tmp_path: Path) -> None:
        assert SchemaRegistry(tmp_path / "nope").list_schemas() == []
