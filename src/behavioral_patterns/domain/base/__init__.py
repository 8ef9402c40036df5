"""Domain base - shared event models."""
from .events import (
    DomainEvent,
    EventHandler,
    EventPublisherPort,
    StatusChangeEvent,
    ValueChangeEvent,
)

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventPublisherPort",
    "StatusChangeEvent",
    "ValueChangeEvent",
]
