"""Base event classes and protocols - foundation for event-driven patterns."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Protocol
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DomainEvent(BaseModel):
    """Base class for all domain events."""
    model_config = ConfigDict(frozen=True)

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=_utcnow)
    event_type: str = ""
    aggregate_id: str
    aggregate_type: str
    version: int = 1
    metadata: Dict[str, Any] = Field(default_factory=dict)

    def __init__(self, **data):
        # Set event_type based on class name if not provided
        if 'event_type' not in data or not data['event_type']:
            data['event_type'] = self.__class__.__name__
        super().__init__(**data)


# =============================================================================
# BASE EVENT CLASSES FOR COMMON PATTERNS
# =============================================================================

class StatusChangeEvent(DomainEvent):
    """Base class for events that track status transitions."""
    old_status: str
    new_status: str
    reason: Optional[str] = None


class ValueChangeEvent(DomainEvent):
    """Base class for events that track a numeric value moving."""
    old_value: float
    new_value: float

    @property
    def change_pct(self) -> float:
        """Relative change in percent; 0 when the old value was 0."""
        if self.old_value == 0:
            return 0.0
        return (self.new_value - self.old_value) / self.old_value * 100.0


# =============================================================================
# PROTOCOLS
# =============================================================================

class EventHandler(Protocol):
    """Protocol for event handlers."""

    def __call__(self, event: DomainEvent) -> None:
        """Handle a domain event."""
        ...


class EventPublisherPort(Protocol):
    """Protocol for anything events can be published to."""

    def publish(self, event: DomainEvent) -> Any:
        """Publish a single domain event."""
        ...
