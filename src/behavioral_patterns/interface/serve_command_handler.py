"""CLI command handler for the REST API server."""
from typing import Any, Dict

import uvicorn

from behavioral_patterns.infrastructure.logging.logger import get_logger


def handle_serve_api(args, app) -> Dict[str, Any]:
    """
    Handle ``system serve``.

    Command line ``--host``/``--port`` win over the server configuration.
    Blocks until the server shuts down.
    """
    logger = get_logger(__name__)
    from behavioral_patterns.api.server import create_fastapi_app

    server_config = app.config.server
    updates = {}
    if getattr(args, "host", None):
        updates["host"] = args.host
    if getattr(args, "port", None):
        updates["port"] = args.port
    if updates:
        server_config = server_config.model_copy(update=updates)

    fastapi_app = create_fastapi_app(server_config, application=app)
    logger.info(f"Starting REST API server on {server_config.host}:{server_config.port}")

    config = uvicorn.Config(
        app=fastapi_app,
        host=server_config.host,
        port=server_config.port,
        log_level=server_config.log_level,
        access_log=server_config.access_log,
    )
    server = uvicorn.Server(config)
    server.run()

    return {
        "message": "Server stopped",
        "host": server_config.host,
        "port": server_config.port,
    }
