"""
Chain of Responsibility pattern - a request pipeline.

Handlers are linked with ``set_next``. Each one either answers the request
with a ``Response`` or passes it on. The sender only knows the first link.
"""
import time
from abc import ABC
from dataclasses import dataclass, field
from threading import Lock
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.core.exceptions import UnhandledRequestError, ValidationError
from behavioral_patterns.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Request:
    path: str
    method: str = "GET"
    client_id: str = "anonymous"
    token: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Response:
    status: int
    body: Dict[str, Any]
    handled_by: str


class Handler(ABC):
    """Base link of the chain. By default it forwards to the next link."""

    def __init__(self):
        self._next: Optional["Handler"] = None

    @property
    def name(self) -> str:
        return type(self).__name__

    def set_next(self, handler: "Handler") -> "Handler":
        """Link ``handler`` after this one and return it, so calls can be chained."""
        self._next = handler
        return handler

    def handle(self, request: Request) -> Optional[Response]:
        if self._next is None:
            return None
        return self._next.handle(request)

    def respond(self, status: int, body: Optional[Dict[str, Any]] = None) -> Response:
        logger.debug(f"{self.name} answered with {status}")
        return Response(status=status, body=dict(body or {}), handled_by=self.name)


class AuthenticationHandler(Handler):
    """Reject requests without a known bearer token."""

    def __init__(self, tokens: Iterable[str], public_paths: Iterable[str] = ()):
        super().__init__()
        self._tokens = set(tokens)
        self._public_paths = set(public_paths)

    def handle(self, request: Request) -> Optional[Response]:
        if request.path not in self._public_paths and request.token not in self._tokens:
            return self.respond(401, {"error": "unauthorized"})
        return super().handle(request)


class RateLimitHandler(Handler):
    """Allow ``limit`` requests per client in each fixed window."""

    def __init__(self, limit: int = 10, window_seconds: float = 1.0,
                 clock: Callable[[], float] = time.monotonic):
        super().__init__()
        if limit < 1 or window_seconds <= 0:
            raise ValidationError("Rate limit and window must be positive")
        self._limit = limit
        self._window = window_seconds
        self._clock = clock
        self._windows: Dict[str, Tuple[float, int]] = {}
        self._lock = Lock()

    def handle(self, request: Request) -> Optional[Response]:
        now = self._clock()
        with self._lock:
            self._prune_expired(now)
            window_start, count = self._windows.get(request.client_id, (now, 0))
            if count >= self._limit:
                logger.warning(f"Rate limit exceeded for {request.client_id}")
                return self.respond(429, {
                    "error": "rate_limited",
                    "retry_after": round(self._window - (now - window_start), 3),
                })
            self._windows[request.client_id] = (window_start, count + 1)
        return super().handle(request)

    def reset(self, client_id: str) -> None:
        with self._lock:
            self._windows.pop(client_id, None)

    @property
    def tracked_clients(self) -> int:
        """Number of clients with an open window."""
        with self._lock:
            return len(self._windows)

    def _prune_expired(self, now: float) -> None:
        # Caller holds the lock
        expired = [client for client, (start, _) in self._windows.items() if now - start >= self._window]
        for client in expired:
            del self._windows[client]


class ValidationHandler(Handler):
    """Check required payload fields on write requests."""

    WRITE_METHODS = ("POST", "PUT", "PATCH")

    def __init__(self, required_fields: Dict[str, List[str]]):
        super().__init__()
        self._required = required_fields

    def handle(self, request: Request) -> Optional[Response]:
        if request.method in self.WRITE_METHODS:
            missing = [f for f in self._required.get(request.path, []) if f not in request.payload]
            if missing:
                return self.respond(400, {"error": "missing_fields", "fields": missing})
        return super().handle(request)


class RouteHandler(Handler):
    """Terminal link: dispatch to a route function or pass on if none matches."""

    def __init__(self, routes: Dict[Tuple[str, str], Callable[[Request], Dict[str, Any]]]):
        super().__init__()
        self._routes = routes

    def handle(self, request: Request) -> Optional[Response]:
        route = self._routes.get((request.method, request.path))
        if route is None:
            return super().handle(request)
        return self.respond(200, route(request))


def build_chain(*handlers: Handler) -> Handler:
    """Link handlers in the given order and return the first one."""
    if not handlers:
        raise ValidationError("A chain needs at least one handler")
    for current, following in zip(handlers, handlers[1:]):
        current.set_next(following)
    return handlers[0]


class HandlerChain:
    """Front for a built chain that treats an unanswered request as an error."""

    def __init__(self, *handlers: Handler):
        self._head = build_chain(*handlers)

    def process(self, request: Request) -> Response:
        response = self._head.handle(request)
        if response is None:
            raise UnhandledRequestError(request.method, request.path)
        return response


@pattern_demo("chain-of-responsibility")
def demo() -> List[str]:
    """Send five requests through auth, rate limit, validation and routing."""
    ticks = iter(range(100))
    chain = HandlerChain(
        AuthenticationHandler(tokens={"s3cret"}, public_paths={"/health"}),
        RateLimitHandler(limit=2, window_seconds=60, clock=lambda: float(next(ticks))),
        ValidationHandler({"/orders": ["sku", "quantity"]}),
        RouteHandler({
            ("GET", "/health"): lambda r: {"status": "ok"},
            ("POST", "/orders"): lambda r: {"created": r.payload["sku"]},
        }),
    )
    requests = [
        Request("/orders", "POST", client_id="bob", payload={"sku": "X1", "quantity": 1}),
        Request("/orders", "POST", client_id="alice", token="s3cret", payload={"sku": "X1"}),
        Request("/orders", "POST", client_id="alice", token="s3cret", payload={"sku": "X1", "quantity": 2}),
        Request("/health", client_id="alice"),
        Request("/missing", client_id="carol", token="s3cret"),
    ]
    lines = []
    for request in requests:
        try:
            response = chain.process(request)
            lines.append(f"{request.method} {request.path} ({request.client_id}) -> "
                         f"{response.status} by {response.handled_by}")
        except UnhandledRequestError as e:
            lines.append(f"{request.method} {request.path} ({request.client_id}) -> unhandled: {e}")
    return lines
