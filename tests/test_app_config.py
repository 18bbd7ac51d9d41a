"""Tests for worship-log configuration management."""

from pathlib import Path

import pytest

from worship_log.config import (
    AppConfig,
    ensure_config_exists,
    get_config_dir,
    get_config_path,
    get_default_db_path,
    get_env_var_name,
)


class TestAppConfig:
    """Tests for AppConfig class."""

    def test_default_values(self):
        """Test that default config values are set correctly."""
        config = AppConfig()

        assert config.base_catalog_path is None
        assert config.sections_path is None
        assert config.marker_prefix == "(CIAS)"
        assert config.recency_days == 30
        assert config.suggestion_limit == 15
        assert config.context == "igreja"
        assert config.title == ""

    def test_load_from_file(self, tmp_path):
        """Test loading config from TOML file."""
        config_file = tmp_path / "config.toml"
        config_file.write_text(
            """
[database]
path = "/custom/path/worship.db"

[catalog]
base_catalog_path = "/custom/hinario.txt"
marker_prefix = "(HCC)"

[service]
recency_days = 45
suggestion_limit = 20
context = "central"
title = "Igreja Central"

[logging]
log_dir = "/custom/logs"
"""
        )

        config = AppConfig.load(config_file)

        assert str(config.db_path) == "/custom/path/worship.db"
        assert config.base_catalog_path == Path("/custom/hinario.txt")
        assert config.sections_path is None
        assert config.marker_prefix == "(HCC)"
        assert config.recency_days == 45
        assert config.suggestion_limit == 20
        assert config.context == "central"
        assert config.title == "Igreja Central"
        assert str(config.log_dir) == "/custom/logs"

    def test_load_missing_file(self, tmp_path):
        """Test that loading missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            AppConfig.load(tmp_path / "nonexistent.toml")

    def test_load_with_env_override(self, tmp_path, monkeypatch):
        """Test that environment variables override file config."""
        config_file = tmp_path / "config.toml"
        config_file.write_text('[database]\npath = "/file/db.sqlite"\n\n[service]\nrecency_days = 10\n')

        monkeypatch.setenv("WORSHIP_LOG_DB_PATH", "/env/db.sqlite")
        monkeypatch.setenv("WORSHIP_LOG_RECENCY_DAYS", "60")

        config = AppConfig.load(config_file)

        assert str(config.db_path) == "/env/db.sqlite"
        assert config.recency_days == 60

    def test_save_and_load(self, tmp_path):
        """Test that saved config loads back unchanged."""
        config_file = tmp_path / "nested" / "config.toml"
        config = AppConfig(
            db_path=tmp_path / "worship.db",
            sections_path=tmp_path / "sections.toml",
            recency_days=21,
            title="Igreja Central",
            log_dir=tmp_path / "logs",
        )

        config.save(config_file)
        loaded = AppConfig.load(config_file)

        assert loaded.db_path == tmp_path / "worship.db"
        assert loaded.base_catalog_path is None
        assert loaded.sections_path == tmp_path / "sections.toml"
        assert loaded.recency_days == 21
        assert loaded.title == "Igreja Central"
        assert loaded.log_dir == tmp_path / "logs"

    def test_get(self):
        """Test getting values by key."""
        config = AppConfig(db_path=Path("/tmp/x.db"))

        assert config.get("recency_days") == 30
        assert config.get("db_path") == "/tmp/x.db"
        assert config.get("missing", "fallback") == "fallback"

    def test_set_preserves_type(self):
        """Test that set converts values to the field's type."""
        config = AppConfig()

        config.set("recency_days", "14")
        config.set("base_catalog_path", "/data/hinario.json")
        config.set("title", "Igreja Central")

        assert config.recency_days == 14
        assert config.base_catalog_path == Path("/data/hinario.json")
        assert config.title == "Igreja Central"

    def test_set_empty_path_clears(self):
        """Test that an empty path value unsets the path."""
        config = AppConfig(sections_path=Path("/data/sections.toml"))

        config.set("sections_path", "")

        assert config.sections_path is None

    def test_set_invalid_key(self):
        """Test that unknown keys are rejected."""
        config = AppConfig()

        with pytest.raises(ValueError, match="Invalid config key"):
            config.set("nonexistent", "value")

    def test_set_invalid_int(self):
        """Test that a non-numeric value for an int field is rejected."""
        config = AppConfig()

        with pytest.raises(ValueError):
            config.set("recency_days", "soon")


class TestConfigPaths:
    """Tests for config path helpers."""

    def test_config_dir_uses_xdg(self, tmp_path, monkeypatch):
        """Test that XDG_CONFIG_HOME is honored."""
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / "worship-log"
        assert get_config_path() == tmp_path / "worship-log" / "config.toml"
        assert get_default_db_path() == tmp_path / "worship-log" / "db" / "worship_log.db"

    def test_env_var_name(self):
        """Test environment variable naming."""
        assert get_env_var_name("db_path") == "WORSHIP_LOG_DB_PATH"
        assert get_env_var_name("service.recency_days") == "WORSHIP_LOG_SERVICE_RECENCY_DAYS"


class TestEnsureConfigExists:
    """Tests for ensure_config_exists."""

    def test_creates_default(self, tmp_path, monkeypatch):
        """Test that a default config file is written when missing."""
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        config = ensure_config_exists()

        assert (tmp_path / "worship-log" / "config.toml").exists()
        assert config.recency_days == 30

    def test_loads_existing(self, tmp_path, monkeypatch):
        """Test that an existing config file is loaded."""
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        config_path = tmp_path / "worship-log" / "config.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[service]\nrecency_days = 7\n")

        assert ensure_config_exists().recency_days == 7

    def test_replaces_corrupted(self, tmp_path, monkeypatch):
        """Test that a corrupted config file is replaced with defaults."""
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        config_path = tmp_path / "worship-log" / "config.toml"
        config_path.parent.mkdir(parents=True)
        config_path.write_text("[service\nbroken")

        config = ensure_config_exists()

        assert config.recency_days == 30
        assert "recency_days = 30" in config_path.read_text()
