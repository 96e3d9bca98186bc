"""Configuration package for the reading tracker."""

from readtrack.config.app_config import (
    AppConfig,
    DefaultsConfig,
    ServerConfig,
    StorageConfig,
    clear_config_cache,
    load_app_config,
)

__all__ = [
    "AppConfig",
    "DefaultsConfig",
    "ServerConfig",
    "StorageConfig",
    "clear_config_cache",
    "load_app_config",
]
