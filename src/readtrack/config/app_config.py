"""Application configuration loader.

Loads configuration from data/config/app_config_v1.yaml, falling back to
built-in defaults. Environment variables override file values:
- PORT: HTTP port for ``readtrack serve``
- READTRACK_DB_PATH: path of the JSON document

Usage:
    from readtrack.config.app_config import load_app_config

    config = load_app_config()
    config.storage.db_path
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

from readtrack.core.records import DEFAULT_STUDENT_NAME

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")

PORT_ENV = "PORT"
DB_PATH_ENV = "READTRACK_DB_PATH"


@dataclass
class StorageConfig:
    """Where the document lives."""

    db_path: Path = Path("data/db.json")


@dataclass
class ServerConfig:
    """HTTP server settings."""

    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class DefaultsConfig:
    """Defaults applied to new records."""

    student_name: str = DEFAULT_STUDENT_NAME


@dataclass
class AppConfig:
    """Application-wide configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _get_defaults() -> dict[str, Any]:
    """Get default configuration values."""
    return {
        "storage": {"db_path": "data/db.json"},
        "server": {"host": "0.0.0.0", "port": 4000, "cors_origins": ["*"]},
        "defaults": {"student_name": DEFAULT_STUDENT_NAME},
    }


def _parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    storage_data = data.get("storage") or {}
    server_data = data.get("server") or {}
    defaults_data = data.get("defaults") or {}

    storage = StorageConfig(
        db_path=Path(storage_data.get("db_path", "data/db.json")),
    )
    server = ServerConfig(
        host=server_data.get("host", "0.0.0.0"),
        port=int(server_data.get("port", 4000)),
        cors_origins=list(server_data.get("cors_origins", ["*"])),
    )
    defaults = DefaultsConfig(
        student_name=defaults_data.get("student_name", DEFAULT_STUDENT_NAME),
    )
    return AppConfig(storage=storage, server=server, defaults=defaults)


def _apply_env_overrides(config: AppConfig) -> AppConfig:
    if db_path := os.environ.get(DB_PATH_ENV):
        config.storage.db_path = Path(db_path)
    if port := os.environ.get(PORT_ENV):
        try:
            config.server.port = int(port)
        except ValueError:
            logger.warning("invalid_port_env", value=port)
    return config


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    data: dict[str, Any]

    if CONFIG_FILE.exists():
        logger.debug("loading_app_config", source=str(CONFIG_FILE))
        data = yaml.safe_load(CONFIG_FILE.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = _get_defaults()

    _cached_config = _apply_env_overrides(_parse_config(data))
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
