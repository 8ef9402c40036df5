"""Pattern Registry - catalog entries joined with their registered demos.

Thread-safe singleton. Tests and tools that need isolation can still create
their own ``PatternRegistry()``.
"""
import threading
from typing import Dict, List, Mapping, Optional

from behavioral_patterns.application.decorators import DemoCallable
from behavioral_patterns.domain.catalog import CatalogDocument, PatternCategory, PatternEntry
from behavioral_patterns.domain.core.exceptions import PatternNotFoundError
from behavioral_patterns.infrastructure.logging.logger import get_logger


class PatternRegistration:
    """Container for one registered pattern."""

    def __init__(self, entry: PatternEntry, demo: Optional[DemoCallable] = None):
        self.entry = entry
        self.demo = demo

    @property
    def has_demo(self) -> bool:
        return self.demo is not None


class PatternRegistry:
    """
    Registry of catalog patterns.

    Registration order is preserved and is the order ``list`` returns.
    """

    _instance: Optional["PatternRegistry"] = None
    _lock = threading.RLock()

    def __init__(self):
        self._registrations: Dict[str, PatternRegistration] = {}
        self._document: Optional[CatalogDocument] = None
        self._logger = get_logger(__name__)
        self._registration_lock = threading.RLock()

    @classmethod
    def get_instance(cls) -> "PatternRegistry":
        """Get singleton instance of the pattern registry."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @property
    def document(self) -> Optional[CatalogDocument]:
        """The catalog document last passed to ``load``."""
        return self._document

    def load(self, document: CatalogDocument, demos: Optional[Mapping[str, DemoCallable]] = None) -> None:
        """
        Replace the registry content with a catalog document.

        Args:
            document: Validated catalog
            demos: Demo callables keyed by slug; slugs not in the catalog are ignored
        """
        demos = demos or {}
        with self._registration_lock:
            self._registrations.clear()
            self._document = document
            for entry in document.patterns:
                self._registrations[entry.slug] = PatternRegistration(entry, demos.get(entry.slug))

        orphaned = sorted(set(demos) - set(document.slugs))
        if orphaned:
            self._logger.warning(f"Demos registered for unknown patterns: {', '.join(orphaned)}")
        self._logger.info(f"Registered {len(document.patterns)} pattern(s)")

    def register(self, entry: PatternEntry, demo: Optional[DemoCallable] = None) -> None:
        """
        Register a single pattern.

        Raises:
            ValueError: If the slug is already registered
        """
        with self._registration_lock:
            if entry.slug in self._registrations:
                raise ValueError(f"Pattern '{entry.slug}' is already registered")
            self._registrations[entry.slug] = PatternRegistration(entry, demo)
            self._logger.debug(f"Registered pattern: {entry.slug}")

    def get(self, slug: str) -> PatternRegistration:
        """
        Get the registration for a slug.

        Raises:
            PatternNotFoundError: If no pattern uses the slug
        """
        with self._registration_lock:
            registration = self._registrations.get(slug)
        if registration is None:
            raise PatternNotFoundError(slug)
        return registration

    def list(self, category: Optional[PatternCategory] = None) -> List[PatternRegistration]:
        """List registrations in catalog order, optionally filtered by category."""
        with self._registration_lock:
            registrations = list(self._registrations.values())
        if category is None:
            return registrations
        category = PatternCategory(category)
        return [r for r in registrations if r.entry.category == category]

    def is_registered(self, slug: str) -> bool:
        with self._registration_lock:
            return slug in self._registrations

    def clear(self) -> None:
        """Clear all registrations (mainly for testing)."""
        with self._registration_lock:
            self._registrations.clear()
            self._document = None
            self._logger.debug("Cleared all pattern registrations")


def get_pattern_registry() -> PatternRegistry:
    """Get the global pattern registry instance."""
    return PatternRegistry.get_instance()
