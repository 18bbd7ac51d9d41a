"""Configuration management for worship-log.

Handles loading, saving, and validating TOML configuration stored in:
- macOS: ~/.config/worship-log/config.toml
- Linux: ~/.config/worship-log/config.toml (XDG_CONFIG_HOME)
- Windows: %APPDATA%\\worship-log\\config.toml
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import tomllib
import tomli_w

from worship_log.core.catalog import DEFAULT_MARKER


@dataclass
class AppConfig:
    """Configuration for worship-log.

    Attributes:
        db_path: Local SQLite database path
        base_catalog_path: File holding the fixed base song list (optional)
        sections_path: TOML file with catalog section ranges (optional)
        marker_prefix: Prefix identifying marked songs
        recency_days: Days within which re-singing a song asks for confirmation
        suggestion_limit: Maximum number of search suggestions
        context: Name used in backup filenames
        title: Congregation name used in shared reports
        log_dir: Directory for log files
    """

    # Database
    db_path: Path = field(default_factory=lambda: get_default_db_path())

    # Catalog
    base_catalog_path: Optional[Path] = None
    sections_path: Optional[Path] = None
    marker_prefix: str = DEFAULT_MARKER

    # Service
    recency_days: int = 30
    suggestion_limit: int = 15
    context: str = "igreja"
    title: str = ""

    # Logging
    log_dir: Path = field(default_factory=lambda: get_config_dir() / "logs")

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """Load configuration from TOML file.

        Args:
            path: Path to config file (defaults to standard location)

        Returns:
            AppConfig instance with loaded values

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        if path is None:
            path = get_config_path()

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        config = cls()

        if "database" in data:
            db_path = data["database"].get("path")
            if db_path:
                config.db_path = Path(db_path).expanduser()

        if "catalog" in data:
            catalog = data["catalog"]
            config.base_catalog_path = _optional_path(catalog.get("base_catalog_path"))
            config.sections_path = _optional_path(catalog.get("sections_path"))
            config.marker_prefix = catalog.get("marker_prefix", config.marker_prefix)

        if "service" in data:
            service = data["service"]
            config.recency_days = int(service.get("recency_days", config.recency_days))
            config.suggestion_limit = int(service.get("suggestion_limit", config.suggestion_limit))
            config.context = service.get("context", config.context)
            config.title = service.get("title", config.title)

        if "logging" in data:
            log_dir = data["logging"].get("log_dir")
            if log_dir:
                config.log_dir = Path(log_dir).expanduser()

        # Environment variables take precedence over the file
        env_db_path = os.environ.get(get_env_var_name("db_path"))
        if env_db_path:
            config.db_path = Path(env_db_path).expanduser()

        env_recency = os.environ.get(get_env_var_name("recency_days"))
        if env_recency:
            config.recency_days = int(env_recency)

        return config

    def save(self, path: Optional[Path] = None) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save config (defaults to standard location)
        """
        if path is None:
            path = get_config_path()

        path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "database": {"path": str(self.db_path)},
            "catalog": {
                "base_catalog_path": str(self.base_catalog_path or ""),
                "sections_path": str(self.sections_path or ""),
                "marker_prefix": self.marker_prefix,
            },
            "service": {
                "recency_days": self.recency_days,
                "suggestion_limit": self.suggestion_limit,
                "context": self.context,
                "title": self.title,
            },
            "logging": {"log_dir": str(self.log_dir)},
        }

        with open(path, "wb") as f:
            tomli_w.dump(data, f)

    def get(self, key: str, default: Optional[str] = None) -> Optional[Any]:
        """Get a configuration value by key.

        Args:
            key: Configuration key (attribute name)
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if not hasattr(self, key):
            return default

        value = getattr(self, key)
        if isinstance(value, Path):
            return str(value)
        return value

    def set(self, key: str, value: str) -> None:
        """Set a configuration value from its string form.

        Args:
            key: Configuration key (attribute name)
            value: Configuration value

        Raises:
            ValueError: If the key is unknown or the value has the wrong type
        """
        if not hasattr(self, key):
            raise ValueError(f"Invalid config key: {key}")

        # Try to preserve type
        current = getattr(self, key)
        if isinstance(current, int):
            new_value: Any = int(value)
        elif isinstance(current, Path) or key in ("base_catalog_path", "sections_path"):
            new_value = _optional_path(value)
        else:
            new_value = value

        setattr(self, key, new_value)


def _optional_path(value: Optional[str]) -> Optional[Path]:
    """Convert a possibly empty string to a Path."""
    if not value:
        return None
    return Path(value).expanduser()


def get_config_dir() -> Path:
    """Get the platform-specific config directory.

    Returns:
        Path to the config directory for worship-log.
    """
    if sys.platform == "darwin" or sys.platform == "linux":
        xdg_config = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config:
            return Path(xdg_config) / "worship-log"
        return Path.home() / ".config" / "worship-log"
    elif sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "worship-log"
        return Path.home() / "AppData" / "Roaming" / "worship-log"
    else:
        return Path.home() / ".config" / "worship-log"


def get_config_path() -> Path:
    """Get the path to the config.toml file.

    Returns:
        Path to config.toml
    """
    return get_config_dir() / "config.toml"


def get_default_db_path() -> Path:
    """Get the default database path.

    Returns:
        Path to default database location
    """
    return get_config_dir() / "db" / "worship_log.db"


def get_env_var_name(key: str) -> str:
    """Get the environment variable name for a config key.

    Args:
        key: Configuration key

    Returns:
        Environment variable name
    """
    return f"WORSHIP_LOG_{key.upper().replace('.', '_')}"


def ensure_config_exists() -> AppConfig:
    """Ensure config file exists, creating default if needed.

    Returns:
        AppConfig instance
    """
    config_path = get_config_path()

    if config_path.exists():
        try:
            return AppConfig.load(config_path)
        except (tomllib.TOMLDecodeError, ValueError):
            # If config is corrupted, create a new one
            pass

    config = AppConfig()
    config.save(config_path)
    return config
