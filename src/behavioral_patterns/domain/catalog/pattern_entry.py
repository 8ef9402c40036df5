"""Catalog entry aggregate - structured description of one design pattern."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from behavioral_patterns.domain.catalog.value_objects import (
    SLUG_PATTERN,
    PatternCategory,
    SnippetReference,
)


class PatternEntry(BaseModel):
    """One pattern section of the catalog.

    The ``intent`` is the pattern's purpose statement and may never be blank.
    """
    model_config = ConfigDict(frozen=True)

    slug: str
    name: str
    category: PatternCategory = PatternCategory.BEHAVIORAL
    intent: str
    applicability: List[str] = Field(default_factory=list)
    participants: List[str] = Field(default_factory=list)
    consequences: List[str] = Field(default_factory=list)
    related: List[str] = Field(default_factory=list)
    snippets: List[SnippetReference] = Field(default_factory=list)
    module: Optional[str] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        """Slugs are kebab-case identifiers, e.g. ``chain-of-responsibility``."""
        if not SLUG_PATTERN.match(v):
            raise ValueError(f"Invalid slug {v!r}: use lowercase kebab-case")
        return v

    @field_validator("name", "intent")
    @classmethod
    def validate_text(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be empty")
        return " ".join(v.split())

    @field_validator("applicability", "participants", "consequences")
    @classmethod
    def validate_items(cls, v: List[str]) -> List[str]:
        return [" ".join(item.split()) for item in v if item and item.strip()]

    @field_validator("snippets", mode="before")
    @classmethod
    def parse_snippets(cls, v: Any) -> Any:
        if v is None:
            return []
        return [SnippetReference.parse(item) if isinstance(item, str) else item for item in v]

    @model_validator(mode="after")
    def validate_related(self) -> "PatternEntry":
        if self.slug in self.related:
            raise ValueError(f"Pattern {self.slug} cannot list itself as related")
        return self

    @property
    def anchor(self) -> str:
        """Markdown anchor for the pattern heading."""
        return self.slug

    def to_summary(self) -> Dict[str, Any]:
        return {
            "slug": self.slug,
            "name": self.name,
            "category": self.category.value,
            "intent": self.intent,
        }


class CatalogDocument(BaseModel):
    """Whole catalog: title, introduction and ordered pattern entries."""
    model_config = ConfigDict(frozen=True)

    title: str = "Behavioral Design Patterns"
    introduction: str = ""
    patterns: List[PatternEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_slugs(self) -> "CatalogDocument":
        seen = set()
        duplicates = []
        for entry in self.patterns:
            if entry.slug in seen:
                duplicates.append(entry.slug)
            seen.add(entry.slug)
        if duplicates:
            raise ValueError(f"Duplicate pattern slugs: {', '.join(duplicates)}")
        return self

    @property
    def slugs(self) -> List[str]:
        return [entry.slug for entry in self.patterns]

    def find(self, slug: str) -> Optional[PatternEntry]:
        return next((entry for entry in self.patterns if entry.slug == slug), None)
