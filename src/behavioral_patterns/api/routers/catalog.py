"""Catalog API routes."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from behavioral_patterns.api.dependencies import get_catalog_service
from behavioral_patterns.application.catalog.service import CatalogApplicationService

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/validation", summary="Validate Catalog")
def validate_catalog(service: CatalogApplicationService = Depends(get_catalog_service)) -> Dict[str, Any]:
    """Run every catalog check. An invalid catalog is still a 200 with ``valid: false``."""
    return service.validate_catalog().to_dict()


@router.get("/readme", summary="Render README", response_class=PlainTextResponse)
def render_readme(
    title: Optional[str] = Query(None, description="README title"),
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> PlainTextResponse:
    return PlainTextResponse(service.render_readme(title=title), media_type="text/markdown")
