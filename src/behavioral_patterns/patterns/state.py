"""
State pattern - provisioning request lifecycle.

``ProvisioningRequest`` (the context) forwards every operation to its current
state object. Each state class implements only the operations that are legal
from it; everything else falls through to ``RequestState`` and raises
``InvalidStateTransitionError``.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.base.events import EventPublisherPort, StatusChangeEvent
from behavioral_patterns.domain.core.exceptions import (
    DomainException,
    InvalidStateTransitionError,
    RetryLimitExceededError,
    ValidationError,
)
from behavioral_patterns.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class RequestStatus(str, Enum):
    """Request status values."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class RequestStatusChangedEvent(StatusChangeEvent):
    """Published on every lifecycle transition."""
    aggregate_type: str = "ProvisioningRequest"


@dataclass(frozen=True)
class StatusTransition:
    old_status: RequestStatus
    new_status: RequestStatus
    reason: Optional[str]
    at: datetime


class RequestState:
    """Base state: every operation is illegal unless a subclass allows it."""

    status: RequestStatus
    is_terminal: bool = False

    def start(self, request: "ProvisioningRequest") -> None:
        self._reject(RequestStatus.RUNNING)

    def record_progress(self, request: "ProvisioningRequest", count: int) -> None:
        self._reject(RequestStatus.RUNNING)

    def fail(self, request: "ProvisioningRequest", reason: str) -> None:
        self._reject(RequestStatus.FAILED)

    def cancel(self, request: "ProvisioningRequest", reason: str) -> None:
        self._reject(RequestStatus.CANCELLED)

    def retry(self, request: "ProvisioningRequest") -> None:
        self._reject(RequestStatus.PENDING)

    def _reject(self, attempted: RequestStatus) -> None:
        raise InvalidStateTransitionError(self.status.value, attempted.value)


class _CancellableState(RequestState):
    """Shared behaviour of the two active states."""

    def fail(self, request: "ProvisioningRequest", reason: str) -> None:
        request._transition(FailedState(), reason)

    def cancel(self, request: "ProvisioningRequest", reason: str) -> None:
        request._transition(CancelledState(), reason)


class PendingState(_CancellableState):
    status = RequestStatus.PENDING

    def start(self, request: "ProvisioningRequest") -> None:
        request._transition(RunningState(), "started")


class RunningState(_CancellableState):
    status = RequestStatus.RUNNING

    def record_progress(self, request: "ProvisioningRequest", count: int) -> None:
        if count < 1:
            raise ValidationError("Progress count must be at least 1", count)
        request.fulfilled = min(request.requested_count, request.fulfilled + count)
        if request.fulfilled == request.requested_count:
            request._transition(CompletedState(), f"{request.fulfilled} of {request.requested_count} fulfilled")


class CompletedState(RequestState):
    status = RequestStatus.COMPLETED
    is_terminal = True


class FailedState(RequestState):
    status = RequestStatus.FAILED

    def retry(self, request: "ProvisioningRequest") -> None:
        if request.attempts > request.max_retries:
            raise RetryLimitExceededError(request.request_id, request.max_retries)
        request.attempts += 1
        request.fulfilled = 0
        request._transition(PendingState(), f"retry {request.attempts - 1}")


class CancelledState(RequestState):
    status = RequestStatus.CANCELLED
    is_terminal = True


class ProvisioningRequest:
    """Context: a request for ``requested_count`` machines."""

    def __init__(self, request_id: str, requested_count: int, max_retries: int = 2,
                 publisher: Optional[EventPublisherPort] = None):
        if requested_count < 1:
            raise ValidationError("A request needs at least one machine", requested_count)
        if max_retries < 0:
            raise ValidationError("max_retries cannot be negative", max_retries)
        self.request_id = request_id
        self.requested_count = requested_count
        self.max_retries = max_retries
        self.fulfilled = 0
        # First attempt counts as attempt 1
        self.attempts = 1
        self.message = ""
        self.history: List[StatusTransition] = []
        self._publisher = publisher
        self._state: RequestState = PendingState()

    @property
    def status(self) -> RequestStatus:
        return self._state.status

    @property
    def is_terminal(self) -> bool:
        return self._state.is_terminal

    # Operations delegate to the current state

    def start(self) -> None:
        self._state.start(self)

    def record_progress(self, count: int = 1) -> None:
        self._state.record_progress(self, count)

    def fail(self, reason: str) -> None:
        self._state.fail(self, reason)

    def cancel(self, reason: str = "cancelled by user") -> None:
        self._state.cancel(self, reason)

    def retry(self) -> None:
        self._state.retry(self)

    def _transition(self, new_state: RequestState, reason: Optional[str]) -> None:
        old_status = self._state.status
        self._state = new_state
        self.message = reason or ""
        self.history.append(
            StatusTransition(old_status, new_state.status, reason, datetime.now(timezone.utc))
        )
        logger.debug(f"Request {self.request_id}: {old_status.value} -> {new_state.status.value}")
        if self._publisher is not None:
            self._publisher.publish(
                RequestStatusChangedEvent(
                    aggregate_id=self.request_id,
                    old_status=old_status.value,
                    new_status=new_state.status.value,
                    reason=reason,
                )
            )


@pattern_demo("state")
def demo() -> List[str]:
    """Drive one request through a failure, a retry and completion."""
    request = ProvisioningRequest("req-1", requested_count=3, max_retries=1)
    lines = []

    request.start()
    request.record_progress(1)
    request.fail("capacity error")
    request.retry()
    request.start()
    request.record_progress(2)
    request.record_progress(5)

    for transition in request.history:
        lines.append(
            f"{transition.old_status.value:>9} -> {transition.new_status.value:<9} ({transition.reason})"
        )
    try:
        request.cancel()
    except DomainException as e:
        lines.append(f"cancel after completion rejected: {e}")
    return lines
