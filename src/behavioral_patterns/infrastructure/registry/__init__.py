"""Registry infrastructure package."""
from behavioral_patterns.infrastructure.registry.pattern_registry import (
    PatternRegistration,
    PatternRegistry,
    get_pattern_registry,
)

__all__ = ["PatternRegistration", "PatternRegistry", "get_pattern_registry"]
