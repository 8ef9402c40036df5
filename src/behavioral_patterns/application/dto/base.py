"""Base DTO class with a stable, snake_case API."""
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict


class BaseDTO(BaseModel):
    """
    Base class for all DTOs.

    Callers use ``to_dict()``/``from_dict()`` rather than pydantic methods so
    the serialization framework stays an implementation detail.
    """
    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-compatible dictionary with snake_case keys."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BaseDTO":
        return cls.model_validate(data)

    @staticmethod
    def serialize_enum(value: Union[Enum, str, None]) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, Enum):
            return value.value
        return str(value)
