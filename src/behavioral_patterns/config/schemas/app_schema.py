"""Main application configuration schema."""
from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from .catalog_schema import CatalogConfig
from .logging_schema import LoggingConfig
from .server_schema import ServerConfig

ENVIRONMENTS = ("development", "testing", "staging", "production")


class AppConfig(BaseModel):
    """Application configuration."""

    version: str = Field("1.0.0", description="Configuration version")
    environment: str = Field("development", description="Environment")
    debug: bool = Field(False, description="Debug mode")
    logging: LoggingConfig = Field(default_factory=lambda: LoggingConfig())
    catalog: CatalogConfig = Field(default_factory=lambda: CatalogConfig())
    server: ServerConfig = Field(default_factory=lambda: ServerConfig())

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        v = v.lower()
        if v not in ENVIRONMENTS:
            raise ValueError(f"Environment must be one of {list(ENVIRONMENTS)}")
        return v

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        return cls.model_validate(data)


def validate_config(data: Dict[str, Any]) -> AppConfig:
    """Validate raw configuration data."""
    return AppConfig.from_dict(data)
