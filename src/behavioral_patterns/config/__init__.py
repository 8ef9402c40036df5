"""Configuration package with clean public API."""
from .schemas import (
    AppConfig,
    CatalogConfig,
    CORSConfig,
    LoggingConfig,
    ServerConfig,
    validate_config,
)
from .manager import ConfigurationManager, get_config_manager

__all__ = [
    "AppConfig",
    "validate_config",
    "CatalogConfig",
    "CORSConfig",
    "LoggingConfig",
    "ServerConfig",
    "ConfigurationManager",
    "get_config_manager",
]
