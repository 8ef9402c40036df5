"""
Catalog Application Service - entry point used by the CLI and the API.

Listing, showing, running demos, validating and rendering all go through this
service; interfaces never touch the registry or renderer directly.
"""
import time
from typing import Any, Dict, List, Optional

from behavioral_patterns.application.catalog.validator import CatalogValidator
from behavioral_patterns.application.dto import DemoResultDTO, PatternDetailDTO, PatternSummaryDTO
from behavioral_patterns.domain.catalog import CatalogDocument, CatalogValidationReport, PatternCategory
from behavioral_patterns.domain.core.exceptions import (
    DemoExecutionError,
    DemoNotAvailableError,
    ValidationError,
)
from behavioral_patterns.infrastructure.catalog.snippets import resolve_snippet
from behavioral_patterns.infrastructure.registry.pattern_registry import PatternRegistry
from behavioral_patterns.infrastructure.rendering.readme_renderer import ReadmeRenderer


class CatalogApplicationService:
    """Application service over the pattern catalog."""

    def __init__(
        self,
        registry: PatternRegistry,
        renderer: ReadmeRenderer,
        logger: Any,
        validator: Optional[CatalogValidator] = None,
        include_snippets: bool = True,
        readme_title: Optional[str] = None,
    ):
        """
        Initialize the service.

        Args:
            registry: Registry already loaded with the catalog
            renderer: README renderer
            logger: Logger for application events
            validator: Catalog validator; a default one rendering through ``renderer`` is built if omitted
            include_snippets: Embed implementation source in the README
            readme_title: Default README title, falls back to the catalog title
        """
        self._registry = registry
        self._renderer = renderer
        self._logger = logger
        self._include_snippets = include_snippets
        self._readme_title = readme_title
        self._validator = validator or CatalogValidator(
            render_readme=lambda document: self._renderer.render(document, include_snippets=True)
        )

    def list_patterns(self, category: Optional[str] = None) -> List[PatternSummaryDTO]:
        """List patterns in catalog order, optionally filtered by category."""
        if category is not None:
            try:
                category = PatternCategory(category.lower())
            except ValueError:
                allowed = ", ".join(c.value for c in PatternCategory)
                raise ValidationError(f"Unknown category '{category}', expected one of: {allowed}")
        return [
            PatternSummaryDTO.from_entry(registration.entry, registration.has_demo)
            for registration in self._registry.list(category)
        ]

    def get_pattern(self, slug: str, include_snippets: bool = False) -> PatternDetailDTO:
        """Get one pattern; raises ``PatternNotFoundError`` for unknown slugs."""
        registration = self._registry.get(slug)
        snippets = None
        if include_snippets:
            snippets = {str(ref): resolve_snippet(ref) for ref in registration.entry.snippets}
        return PatternDetailDTO.from_entry(registration.entry, registration.has_demo, snippets)

    def run_demo(self, slug: str) -> DemoResultDTO:
        """
        Run the demo registered for a pattern.

        Raises:
            PatternNotFoundError: Unknown slug
            DemoNotAvailableError: The pattern has no demo
            DemoExecutionError: The demo raised
        """
        registration = self._registry.get(slug)
        if not registration.has_demo:
            raise DemoNotAvailableError(slug)

        self._logger.info(f"Running demo for {slug}")
        started = time.perf_counter()
        try:
            lines = registration.demo()
        except Exception as e:
            self._logger.error(f"Demo for {slug} failed: {e}", exc_info=True)
            raise DemoExecutionError(slug, str(e)) from e
        duration_ms = (time.perf_counter() - started) * 1000.0

        return DemoResultDTO(
            slug=slug,
            name=registration.entry.name,
            lines=[str(line) for line in lines],
            duration_ms=round(duration_ms, 3),
        )

    def run_all_demos(self) -> List[DemoResultDTO]:
        """Run every available demo in catalog order."""
        return [
            self.run_demo(registration.entry.slug)
            for registration in self._registry.list()
            if registration.has_demo
        ]

    def validate_catalog(self) -> CatalogValidationReport:
        document = self._require_document()
        demos = {r.entry.slug: r.demo for r in self._registry.list() if r.has_demo}
        return self._validator.validate(document, demos)

    def render_readme(self, title: Optional[str] = None) -> str:
        """Render the catalog README as Markdown."""
        return self._renderer.render(
            self._require_document(),
            title=title or self._readme_title,
            include_snippets=self._include_snippets,
        )

    def get_catalog_info(self) -> Dict[str, Any]:
        document = self._require_document()
        registrations = self._registry.list()
        return {
            "title": document.title,
            "pattern_count": len(registrations),
            "demo_count": sum(1 for r in registrations if r.has_demo),
            "categories": sorted({r.entry.category.value for r in registrations}),
        }

    def _require_document(self) -> CatalogDocument:
        document = self._registry.document
        if document is None:
            # Patterns registered one by one still form a catalog
            document = CatalogDocument(patterns=[r.entry for r in self._registry.list()])
        return document
