"""FastAPI dependency integration."""
from fastapi import Depends, Request

from behavioral_patterns.application.catalog.service import CatalogApplicationService
from behavioral_patterns.bootstrap import Application


def get_application(request: Request) -> Application:
    """The application attached to the FastAPI app by ``create_fastapi_app``."""
    return request.app.state.application


def get_catalog_service(application: Application = Depends(get_application)) -> CatalogApplicationService:
    return application.get_catalog_service()
