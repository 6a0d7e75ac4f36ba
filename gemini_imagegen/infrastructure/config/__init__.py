"""Configuration Infrastructure"""

from .settings import (
    Settings,
    ServerConfig,
    GeminiConfig,
    StorageConfig,
    HtmlConfig,
    LoggingConfig,
    ConfigError,
    load_settings,
)

__all__ = [
    "Settings",
    "ServerConfig",
    "GeminiConfig",
    "StorageConfig",
    "HtmlConfig",
    "LoggingConfig",
    "ConfigError",
    "load_settings",
]
