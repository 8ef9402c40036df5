"""Configuration schemas."""
from .app_schema import ENVIRONMENTS, AppConfig, validate_config
from .catalog_schema import CatalogConfig
from .logging_schema import LoggingConfig
from .server_schema import CORSConfig, ServerConfig

__all__ = [
    "ENVIRONMENTS",
    "AppConfig",
    "validate_config",
    "CatalogConfig",
    "LoggingConfig",
    "CORSConfig",
    "ServerConfig",
]
