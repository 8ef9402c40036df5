"""Pattern and catalog command handlers for the interface layer."""
from typing import Any, Dict, Union

from behavioral_patterns.domain.core.exceptions import ValidationError
from behavioral_patterns.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


def handle_list_patterns(args, app) -> Dict[str, Any]:
    """
    Handle ``patterns list``.

    Returns:
        ``{"patterns": [...], "count": n}``
    """
    service = app.get_catalog_service()
    patterns = service.list_patterns(getattr(args, "category", None))
    return {"patterns": [p.to_dict() for p in patterns], "count": len(patterns)}


def handle_show_pattern(args, app) -> Dict[str, Any]:
    service = app.get_catalog_service()
    detail = service.get_pattern(args.slug, include_snippets=getattr(args, "snippets", False))
    return detail.to_dict()


def handle_run_demo(args, app) -> Dict[str, Any]:
    """Handle ``patterns demo SLUG`` and ``patterns demo --all``."""
    service = app.get_catalog_service()
    if getattr(args, "all", False):
        results = service.run_all_demos()
        return {"demos": [r.to_dict() for r in results], "count": len(results)}
    if not getattr(args, "slug", None):
        raise ValidationError("Specify a pattern slug or --all")
    return service.run_demo(args.slug).to_dict()


def handle_validate_catalog(args, app) -> Dict[str, Any]:
    service = app.get_catalog_service()
    report = service.validate_catalog()
    if not report.valid:
        logger.warning(f"Catalog has {len(report.errors)} error(s)")
    return report.to_dict()


def handle_render_readme(args, app) -> Union[str, Dict[str, Any]]:
    """Handle ``catalog readme``; returns the Markdown text itself."""
    service = app.get_catalog_service()
    return service.render_readme(title=getattr(args, "title", None))
