"""Pattern catalog domain models."""
from .pattern_entry import CatalogDocument, PatternEntry
from .validation import CatalogIssue, CatalogValidationReport
from .value_objects import IssueSeverity, PatternCategory, SnippetReference

__all__ = [
    "CatalogDocument",
    "PatternEntry",
    "CatalogIssue",
    "CatalogValidationReport",
    "IssueSeverity",
    "PatternCategory",
    "SnippetReference",
]
