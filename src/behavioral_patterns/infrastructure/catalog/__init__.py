"""Catalog infrastructure: YAML loading and snippet resolution."""
from behavioral_patterns.infrastructure.catalog.loader import CatalogLoader
from behavioral_patterns.infrastructure.catalog.snippets import resolve_object, resolve_snippet

__all__ = ["CatalogLoader", "resolve_object", "resolve_snippet"]
