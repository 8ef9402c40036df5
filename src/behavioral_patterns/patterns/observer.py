"""
Observer pattern - subjects notify subscribers when their state changes.

``EventPublisher`` keeps the subscriber lists; ``StockTicker`` is a concrete
subject that publishes ``PriceChangedEvent`` whenever a price moves.
Subscribers are plain callables taking the event.
"""
from dataclasses import dataclass, field
from itertools import count
from typing import Callable, Dict, List, Optional

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.base.events import DomainEvent, ValueChangeEvent
from behavioral_patterns.domain.core.exceptions import EventDeliveryError, ValidationError
from behavioral_patterns.infrastructure.logging.logger import get_logger, get_structured_logger

WILDCARD = "*"

Handler = Callable[[DomainEvent], None]

_subscription_ids = count(1)


@dataclass(frozen=True)
class Subscription:
    """Handle returned by ``subscribe``; pass it to ``unsubscribe``."""
    event_type: str
    handler: Handler
    subscription_id: int = field(default_factory=lambda: next(_subscription_ids))


class EventPublisher:
    """
    Configurable event publisher.

    Modes:
    - "sync": call subscribed handlers synchronously
    - "logging": only log events for an audit trail, handlers are not called
    """

    VALID_MODES = ("sync", "logging")

    def __init__(self, mode: str = "sync", raise_on_error: bool = False):
        """Initialize with publishing mode."""
        if mode not in self.VALID_MODES:
            raise ValidationError(f"Invalid mode '{mode}'. Must be one of: {list(self.VALID_MODES)}")
        self.mode = mode
        self.raise_on_error = raise_on_error
        self._subscriptions: Dict[str, List[Subscription]] = {}
        self._logger = get_logger(__name__)

    def subscribe(self, event_type: str, handler: Handler) -> Subscription:
        """Subscribe ``handler`` to ``event_type`` ("*" for every event)."""
        if not callable(handler):
            raise ValidationError("Event handler must be callable")
        subscription = Subscription(event_type=event_type, handler=handler)
        self._subscriptions.setdefault(event_type, []).append(subscription)
        self._logger.debug(f"Registered handler for {event_type}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove a subscription. Returns False if it was not registered."""
        subscriptions = self._subscriptions.get(subscription.event_type, [])
        for existing in subscriptions:
            if existing.subscription_id == subscription.subscription_id:
                subscriptions.remove(existing)
                if not subscriptions:
                    del self._subscriptions[subscription.event_type]
                return True
        return False

    def publish(self, event: DomainEvent) -> int:
        """
        Publish an event.

        Type-specific subscribers run first in subscription order, then
        wildcard subscribers. A failing handler does not stop the others.

        Returns:
            Number of handlers invoked
        """
        if self.mode == "logging":
            self._log_event(event)
            return 0

        # Snapshot: changes made by handlers apply to the next publish
        handlers = list(self._subscriptions.get(event.event_type, []))
        if event.event_type != WILDCARD:
            handlers += list(self._subscriptions.get(WILDCARD, []))

        if not handlers:
            self._logger.debug(f"No handlers registered for {event.event_type}")
            return 0

        errors: List[Exception] = []
        for subscription in handlers:
            try:
                subscription.handler(event)
            except Exception as e:
                self._logger.error(f"Event handler failed for {event.event_type}: {e}")
                errors.append(e)

        if errors and self.raise_on_error:
            raise EventDeliveryError(event.event_type, errors)
        return len(handlers)

    def publish_all(self, events: List[DomainEvent]) -> int:
        """Publish multiple events in order."""
        return sum(self.publish(event) for event in events)

    def get_registered_handlers(self) -> Dict[str, int]:
        """Get count of registered handlers by event type."""
        return {event_type: len(subs) for event_type, subs in self._subscriptions.items()}

    def _log_event(self, event: DomainEvent) -> None:
        self._logger.info(
            f"Event: {event.event_type} | "
            f"Aggregate: {event.aggregate_type}:{event.aggregate_id} | "
            f"Time: {event.occurred_at.isoformat()}"
        )


class PriceChangedEvent(ValueChangeEvent):
    """Raised by ``StockTicker`` when a symbol's price changes."""
    aggregate_type: str = "StockTicker"


class StockTicker:
    """Concrete subject: holds prices and announces changes."""

    def __init__(self, publisher: EventPublisher):
        self._publisher = publisher
        self._prices: Dict[str, float] = {}

    def price(self, symbol: str) -> Optional[float]:
        return self._prices.get(symbol)

    def update(self, symbol: str, price: float) -> bool:
        """Set a price. Returns True if an event was published."""
        if price < 0:
            raise ValidationError(f"Price for {symbol} cannot be negative", price)
        old = self._prices.get(symbol)
        self._prices[symbol] = price
        if old is None or old == price:
            return False
        self._publisher.publish(
            PriceChangedEvent(aggregate_id=symbol, old_value=old, new_value=price)
        )
        return True


class EventRecorder:
    """Observer that keeps every event it receives."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    def __call__(self, event: DomainEvent) -> None:
        self.events.append(event)


class PriceAlertObserver:
    """Observer that raises an alert when a price moves more than a threshold."""

    def __init__(self, threshold_pct: float):
        if threshold_pct <= 0:
            raise ValidationError("Alert threshold must be positive", threshold_pct)
        self.threshold_pct = threshold_pct
        self.alerts: List[str] = []

    def __call__(self, event: DomainEvent) -> None:
        if not isinstance(event, ValueChangeEvent):
            return
        change = event.change_pct
        if abs(change) >= self.threshold_pct:
            direction = "up" if change > 0 else "down"
            self.alerts.append(f"{event.aggregate_id} {direction} {abs(change):.1f}%")


class AuditLogObserver:
    """Observer that writes one structured log line per event."""

    def __init__(self, logger=None):
        self._logger = logger or get_structured_logger(__name__)

    def __call__(self, event: DomainEvent) -> None:
        self._logger.info(
            "domain_event",
            event_type=event.event_type,
            aggregate_type=event.aggregate_type,
            aggregate_id=event.aggregate_id,
            event_id=event.event_id,
        )


@pattern_demo("observer")
def demo() -> List[str]:
    """Two observers follow a ticker; one unsubscribes half way."""
    lines = []
    publisher = EventPublisher()
    ticker = StockTicker(publisher)
    alerts = PriceAlertObserver(threshold_pct=5.0)
    recorder = EventRecorder()

    publisher.subscribe("PriceChangedEvent", alerts)
    recorder_subscription = publisher.subscribe(WILDCARD, recorder)

    for symbol, price in [("ACME", 100.0), ("ACME", 103.0), ("ACME", 97.0), ("INIT", 10.0)]:
        ticker.update(symbol, price)
    lines.append(f"after 4 updates: recorder saw {len(recorder.events)} event(s)")

    publisher.unsubscribe(recorder_subscription)
    ticker.update("INIT", 12.0)
    ticker.update("INIT", 12.0)

    lines.append(f"after unsubscribe: recorder still has {len(recorder.events)} event(s)")
    lines.extend(f"alert: {alert}" for alert in alerts.alerts)
    return lines
