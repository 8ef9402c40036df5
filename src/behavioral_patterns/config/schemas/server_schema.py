"""Server configuration schema for the read-only REST API."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CORSConfig(BaseModel):
    """CORS configuration."""

    enabled: bool = Field(True, description="Enable CORS")
    origins: List[str] = Field(["*"], description="Allowed origins")
    methods: List[str] = Field(["GET", "POST", "OPTIONS"], description="Allowed methods")
    headers: List[str] = Field(["*"], description="Allowed headers")
    credentials: bool = Field(False, description="Allow credentials")


class ServerConfig(BaseModel):
    """REST API server configuration."""
    model_config = ConfigDict(extra="forbid")

    host: str = Field("127.0.0.1", description="Server host")
    port: int = Field(8000, description="Server port")
    log_level: str = Field("info", description="uvicorn log level")
    access_log: bool = Field(True, description="Enable access logging")

    # Documentation
    docs_enabled: bool = Field(True, description="Enable API documentation")
    docs_url: str = Field("/docs", description="Swagger UI URL")
    redoc_url: str = Field("/redoc", description="ReDoc URL")
    openapi_url: str = Field("/openapi.json", description="OpenAPI schema URL")

    cors: CORSConfig = Field(default_factory=CORSConfig, description="CORS configuration")

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["critical", "error", "warning", "info", "debug", "trace"]
        v = v.lower()
        if v not in valid_levels:
            raise ValueError(f"Server log level must be one of {valid_levels}")
        return v
