"""FastAPI server factory and application setup."""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from behavioral_patterns._package import DESCRIPTION, PACKAGE_NAME, __version__
from behavioral_patterns.api.middleware import LoggingMiddleware
from behavioral_patterns.bootstrap import Application
from behavioral_patterns.config.schemas.server_schema import ServerConfig
from behavioral_patterns.domain.core.exceptions import DomainException
from behavioral_patterns.infrastructure.error.exception_handler import get_exception_handler
from behavioral_patterns.infrastructure.logging.logger import get_logger


def create_fastapi_app(
    server_config: Optional[ServerConfig] = None,
    application: Optional[Application] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        server_config: Server configuration, defaults to ``ServerConfig()``
        application: Initialized application; one is created from the default
            configuration when omitted

    Returns:
        Configured FastAPI application
    """
    server_config = server_config or ServerConfig()
    if application is None:
        application = Application()
    application.initialize()

    app = FastAPI(
        title="Behavioral Patterns API",
        description=DESCRIPTION,
        version=__version__,
        docs_url=server_config.docs_url if server_config.docs_enabled else None,
        redoc_url=server_config.redoc_url if server_config.docs_enabled else None,
        openapi_url=server_config.openapi_url if server_config.docs_enabled else None,
    )
    app.state.application = application

    logger = get_logger(__name__)

    if server_config.cors.enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=server_config.cors.origins,
            allow_credentials=server_config.cors.credentials,
            allow_methods=server_config.cors.methods,
            allow_headers=server_config.cors.headers,
        )
        logger.info("CORS middleware enabled")

    app.add_middleware(LoggingMiddleware)

    exception_handler = get_exception_handler()

    def _error_json(request: Request, exc: Exception) -> JSONResponse:
        error_response = exception_handler.handle_error_for_http(exc)
        content = error_response.to_dict()
        content["success"] = False
        content["request_id"] = getattr(request.state, "request_id", "unknown")
        return JSONResponse(status_code=error_response.http_status, content=content)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(request: Request, exc: DomainException):
        return _error_json(request, exc)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for all unhandled exceptions."""
        return _error_json(request, exc)

    @app.get("/health", tags=["System"])
    async def health_check():
        return {"status": "healthy", "service": PACKAGE_NAME, "version": __version__}

    @app.get("/info", tags=["System"])
    def info():
        return {
            "service": PACKAGE_NAME,
            "version": __version__,
            "description": DESCRIPTION,
            **application.get_catalog_service().get_catalog_info(),
        }

    _register_routers(app)

    logger.info(f"FastAPI application created with {len(app.routes)} routes")
    return app


def _register_routers(app: FastAPI) -> None:
    from behavioral_patterns.api.routers import catalog, patterns

    app.include_router(patterns.router)
    app.include_router(catalog.router)
