"""Catalog value objects."""
import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

SLUG_PATTERN = re.compile(r"^[a-z][a-z0-9]*(-[a-z0-9]+)*$")
_REFERENCE_PATTERN = re.compile(
    r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*:[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$"
)


class PatternCategory(str, Enum):
    """Gang-of-Four pattern families."""
    BEHAVIORAL = "behavioral"
    CREATIONAL = "creational"
    STRUCTURAL = "structural"


class IssueSeverity(str, Enum):
    """Severity of a catalog validation issue."""
    ERROR = "error"
    WARNING = "warning"


class SnippetReference(BaseModel):
    """Pointer to an importable object whose source is shown as a snippet.

    Written as ``"package.module:QualifiedName"``.
    """
    model_config = ConfigDict(frozen=True)

    module: str
    qualname: str

    @classmethod
    def parse(cls, value: str) -> "SnippetReference":
        """Parse a ``module:QualifiedName`` string."""
        if not isinstance(value, str) or not _REFERENCE_PATTERN.match(value.strip()):
            raise ValueError(
                f"Invalid snippet reference {value!r}, expected 'module.path:QualifiedName'"
            )
        module, qualname = value.strip().split(":", 1)
        return cls(module=module, qualname=qualname)

    @field_validator("module", "qualname")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Snippet reference parts cannot be empty")
        return v

    def __str__(self) -> str:
        return f"{self.module}:{self.qualname}"
