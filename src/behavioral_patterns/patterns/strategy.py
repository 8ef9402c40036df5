"""
Strategy pattern - interchangeable backend selection algorithms.

A ``LoadBalancer`` (the context) delegates the choice of backend to a
``SelectionStrategy``. Algorithms can be swapped at run time without the
balancer knowing which one is in use.
"""
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from behavioral_patterns.application.decorators import pattern_demo
from behavioral_patterns.domain.core.exceptions import NoHealthyBackendError, ValidationError
from behavioral_patterns.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Backend:
    """A server requests can be routed to."""
    name: str
    weight: int = 1
    active_connections: int = 0
    healthy: bool = True

    def __post_init__(self):
        if self.weight < 1:
            raise ValidationError(f"Backend {self.name} weight must be at least 1", self.weight)


class SelectionStrategy(ABC):
    """Strategy interface: pick one backend out of the healthy candidates."""

    name: str = "abstract"

    @abstractmethod
    def select(self, backends: Sequence[Backend]) -> Backend:
        """Select a backend. ``backends`` is never empty."""


class RoundRobinStrategy(SelectionStrategy):
    """Cycle through the backends in declaration order."""

    name = "round_robin"

    def __init__(self):
        self._index = 0

    def select(self, backends: Sequence[Backend]) -> Backend:
        backend = backends[self._index % len(backends)]
        self._index += 1
        return backend


class WeightedRoundRobinStrategy(SelectionStrategy):
    """
    Smooth weighted round robin.

    Every pick adds each backend's weight to its running score, chooses the
    highest score and subtracts the total weight from the winner. Heavier
    backends get proportionally more picks without being chosen in bursts.
    """

    name = "weighted_round_robin"

    def __init__(self):
        self._current: Dict[str, int] = {}

    def select(self, backends: Sequence[Backend]) -> Backend:
        names = {b.name for b in backends}
        # Forget scores of backends that left the candidate set
        self._current = {k: v for k, v in self._current.items() if k in names}

        total = 0
        for backend in backends:
            self._current[backend.name] = self._current.get(backend.name, 0) + backend.weight
            total += backend.weight

        chosen = max(backends, key=lambda b: self._current[b.name])
        self._current[chosen.name] -= total
        return chosen


class LeastConnectionsStrategy(SelectionStrategy):
    """Pick the backend with the fewest active connections."""

    name = "least_connections"

    def select(self, backends: Sequence[Backend]) -> Backend:
        return min(backends, key=lambda b: b.active_connections)


class RandomStrategy(SelectionStrategy):
    """Pick uniformly at random; seedable for reproducible runs."""

    name = "random"

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def select(self, backends: Sequence[Backend]) -> Backend:
        return self._random.choice(list(backends))


STRATEGIES: Dict[str, Callable[..., SelectionStrategy]] = {
    RoundRobinStrategy.name: RoundRobinStrategy,
    WeightedRoundRobinStrategy.name: WeightedRoundRobinStrategy,
    LeastConnectionsStrategy.name: LeastConnectionsStrategy,
    RandomStrategy.name: RandomStrategy,
}


def create_strategy(name: str, **kwargs) -> SelectionStrategy:
    """Create a selection strategy by name."""
    if name not in STRATEGIES:
        raise ValidationError(
            f"Unknown selection strategy '{name}'. Available: {', '.join(sorted(STRATEGIES))}"
        )
    return STRATEGIES[name](**kwargs)


class LoadBalancer:
    """Context object: routes requests using the configured strategy."""

    def __init__(self, backends: Sequence[Backend], strategy: SelectionStrategy):
        names = [b.name for b in backends]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationError(f"Duplicate backend names: {', '.join(duplicates)}")
        self._backends: List[Backend] = list(backends)
        self._strategy = strategy

    @property
    def strategy(self) -> SelectionStrategy:
        return self._strategy

    @property
    def backends(self) -> List[Backend]:
        return list(self._backends)

    def set_strategy(self, strategy: SelectionStrategy) -> None:
        """Swap the selection algorithm at run time."""
        logger.debug(f"Switching strategy {self._strategy.name} -> {strategy.name}")
        self._strategy = strategy

    def route(self) -> Backend:
        """Route one request and return the chosen backend."""
        candidates = [b for b in self._backends if b.healthy]
        if not candidates:
            raise NoHealthyBackendError(len(self._backends))

        backend = self._strategy.select(candidates)
        backend.active_connections += 1
        logger.debug(f"Routed request to {backend.name} using {self._strategy.name}")
        return backend

    def release(self, name: str) -> None:
        """Mark one connection to ``name`` as finished."""
        backend = self._get(name)
        backend.active_connections = max(0, backend.active_connections - 1)

    def mark_unhealthy(self, name: str) -> None:
        self._get(name).healthy = False

    def mark_healthy(self, name: str) -> None:
        self._get(name).healthy = True

    def _get(self, name: str) -> Backend:
        for backend in self._backends:
            if backend.name == name:
                return backend
        raise ValidationError(f"Unknown backend '{name}'")


@pattern_demo("strategy")
def demo() -> List[str]:
    """Route the same traffic with three strategies."""
    lines = []
    backends = [Backend("a", weight=5), Backend("b"), Backend("c")]
    balancer = LoadBalancer(backends, RoundRobinStrategy())

    for strategy in (RoundRobinStrategy(), WeightedRoundRobinStrategy(), LeastConnectionsStrategy()):
        for backend in backends:
            backend.active_connections = 0
        balancer.set_strategy(strategy)
        picks = []
        for i in range(7):
            picks.append(balancer.route().name)
            # Every other request finishes immediately on backend "a"
            if i % 2 == 0 and backends[0].active_connections:
                balancer.release("a")
        lines.append(f"{strategy.name:<22} -> {' '.join(picks)}")

    balancer.mark_unhealthy("a")
    balancer.set_strategy(RoundRobinStrategy())
    picks = [balancer.route().name for _ in range(4)]
    lines.append(f"{'a unhealthy':<22} -> {' '.join(picks)}")
    return lines
