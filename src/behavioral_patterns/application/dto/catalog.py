"""Catalog DTOs returned by the application service."""
from typing import Dict, List, Optional

from pydantic import Field

from behavioral_patterns.application.dto.base import BaseDTO
from behavioral_patterns.domain.catalog import PatternEntry


class PatternSummaryDTO(BaseDTO):
    """One line of the pattern listing."""
    slug: str
    name: str
    category: str
    intent: str
    has_demo: bool = False

    @classmethod
    def from_entry(cls, entry: PatternEntry, has_demo: bool = False) -> "PatternSummaryDTO":
        return cls(
            slug=entry.slug,
            name=entry.name,
            category=cls.serialize_enum(entry.category),
            intent=entry.intent,
            has_demo=has_demo,
        )


class PatternDetailDTO(PatternSummaryDTO):
    """Full pattern description, optionally with resolved snippet source."""
    applicability: List[str] = Field(default_factory=list)
    participants: List[str] = Field(default_factory=list)
    consequences: List[str] = Field(default_factory=list)
    related: List[str] = Field(default_factory=list)
    snippet_refs: List[str] = Field(default_factory=list)
    snippets: Optional[Dict[str, str]] = None
    module: Optional[str] = None

    @classmethod
    def from_entry(
        cls,
        entry: PatternEntry,
        has_demo: bool = False,
        snippets: Optional[Dict[str, str]] = None,
    ) -> "PatternDetailDTO":
        return cls(
            slug=entry.slug,
            name=entry.name,
            category=cls.serialize_enum(entry.category),
            intent=entry.intent,
            has_demo=has_demo,
            applicability=list(entry.applicability),
            participants=list(entry.participants),
            consequences=list(entry.consequences),
            related=list(entry.related),
            snippet_refs=[str(ref) for ref in entry.snippets],
            snippets=snippets,
            module=entry.module,
        )


class DemoResultDTO(BaseDTO):
    """Transcript of one demo run."""
    slug: str
    name: str
    lines: List[str] = Field(default_factory=list)
    duration_ms: float = 0.0
