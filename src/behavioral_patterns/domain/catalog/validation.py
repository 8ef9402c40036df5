"""Catalog validation report models."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from behavioral_patterns.domain.catalog.value_objects import IssueSeverity


class CatalogIssue(BaseModel):
    """A single problem found while checking the catalog."""
    model_config = ConfigDict(frozen=True)

    slug: Optional[str] = None
    severity: IssueSeverity
    check: str
    message: str


class CatalogValidationReport(BaseModel):
    """Outcome of a catalog check. Valid means no error-level issues."""
    model_config = ConfigDict(frozen=True)

    checked: int = 0
    issues: List[CatalogIssue] = Field(default_factory=list)

    @property
    def errors(self) -> List[CatalogIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.ERROR]

    @property
    def warnings(self) -> List[CatalogIssue]:
        return [i for i in self.issues if i.severity == IssueSeverity.WARNING]

    @property
    def valid(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "checked": self.checked,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "issues": [issue.model_dump(mode="json") for issue in self.issues],
        }
