"""Pattern API routes."""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from behavioral_patterns.api.dependencies import get_catalog_service
from behavioral_patterns.application.catalog.service import CatalogApplicationService

router = APIRouter(prefix="/patterns", tags=["Patterns"])


@router.get("", summary="List Patterns", description="Get all catalog patterns")
def list_patterns(
    category: Optional[str] = Query(None, description="Filter by category"),
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    patterns = service.list_patterns(category)
    return {"patterns": [p.to_dict() for p in patterns], "count": len(patterns)}


@router.get("/{slug}", summary="Get Pattern", description="Get one pattern by slug")
def get_pattern(
    slug: str,
    snippets: bool = Query(False, description="Include implementation source"),
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    """
    Get a pattern.

    - **slug**: Pattern slug, e.g. ``template-method``
    - **snippets**: Include the source of the referenced implementation objects
    """
    return service.get_pattern(slug, include_snippets=snippets).to_dict()


@router.post("/{slug}/demo", summary="Run Demo", description="Run the pattern demo and return its transcript")
def run_demo(
    slug: str,
    service: CatalogApplicationService = Depends(get_catalog_service),
) -> Dict[str, Any]:
    return service.run_demo(slug).to_dict()
