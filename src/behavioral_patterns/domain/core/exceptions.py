# src/behavioral_patterns/domain/core/exceptions.py
from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class ValidationError(DomainException):
    """Raised when domain validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class ResourceNotFoundError(DomainException):
    """Raised when a requested resource cannot be found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with ID {resource_id} not found")
        self.resource_type = resource_type
        self.resource_id = resource_id


class PatternNotFoundError(ResourceNotFoundError):
    """Raised when a pattern slug is not in the catalog."""
    def __init__(self, slug: str):
        super().__init__("Pattern", slug)
        self.slug = slug


class ParticipantNotFoundError(ResourceNotFoundError):
    """Raised when a chat participant cannot be found in a room."""
    def __init__(self, name: str):
        super().__init__("Participant", name)
        self.name = name


class InvalidStateTransitionError(DomainException):
    """Raised when attempting an invalid state transition."""
    def __init__(self, current_state: str, attempted_state: str):
        super().__init__(
            f"Cannot transition from {current_state} to {attempted_state}"
        )
        self.current_state = current_state
        self.attempted_state = attempted_state


class RetryLimitExceededError(DomainException):
    """Raised when a failed request has used up its retries."""
    def __init__(self, request_id: str, max_retries: int):
        super().__init__(f"Request {request_id} exceeded retry limit of {max_retries}")
        self.request_id = request_id
        self.max_retries = max_retries


class NothingToUndoError(InvalidStateTransitionError):
    """Raised when undo is requested with an empty history."""
    def __init__(self):
        super().__init__("empty history", "undo")


class NothingToRedoError(InvalidStateTransitionError):
    """Raised when redo is requested with nothing undone."""
    def __init__(self):
        super().__init__("empty redo stack", "redo")


class ParticipantMutedError(DomainException):
    """Raised when a muted participant tries to send a message."""
    def __init__(self, name: str):
        super().__init__(f"Participant {name} is muted")
        self.name = name


class NoHealthyBackendError(DomainException):
    """Raised when a load balancer has no healthy backend to route to."""
    def __init__(self, total_backends: int):
        super().__init__(f"No healthy backend available ({total_backends} configured)")
        self.total_backends = total_backends


class UnhandledRequestError(DomainException):
    """Raised when a request reaches the end of a handler chain unhandled."""
    def __init__(self, method: str, path: str):
        super().__init__(f"No handler in the chain handled {method} {path}")
        self.method = method
        self.path = path


class EvaluationError(DomainException):
    """Raised when an expression cannot be evaluated."""
    def __init__(self, message: str, expression: Optional[str] = None):
        super().__init__(message)
        self.expression = expression


class EventDeliveryError(DomainException):
    """Raised when one or more observers failed while handling an event."""
    def __init__(self, event_type: str, errors: List[Exception]):
        super().__init__(
            f"{len(errors)} handler(s) failed for {event_type}: "
            + "; ".join(str(e) for e in errors)
        )
        self.event_type = event_type
        self.errors = errors


class DemoNotAvailableError(DomainException):
    """Raised when a pattern has no registered demo."""
    def __init__(self, slug: str):
        super().__init__(f"No demo registered for pattern {slug}")
        self.slug = slug


class DemoExecutionError(DomainException):
    """Raised when a pattern demo fails."""
    def __init__(self, slug: str, message: str):
        super().__init__(f"Demo for {slug} failed: {message}")
        self.slug = slug


class SnippetResolutionError(DomainException):
    """Raised when a snippet reference cannot be resolved to source code."""
    def __init__(self, reference: str, message: str):
        super().__init__(f"Cannot resolve snippet {reference}: {message}")
        self.reference = reference


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class CatalogValidationError(ValidationError):
    """Raised when catalog data fails validation."""
    def __init__(self, source: str, errors: Dict[str, str]):
        super().__init__(f"Catalog validation failed for {source}", errors)
        self.source = source
        self.errors = errors
