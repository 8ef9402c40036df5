"""Catalog application services."""
from behavioral_patterns.application.catalog.service import CatalogApplicationService
from behavioral_patterns.application.catalog.validator import CatalogValidator

__all__ = ["CatalogApplicationService", "CatalogValidator"]
