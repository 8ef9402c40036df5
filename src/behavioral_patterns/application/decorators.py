"""
Application Layer Decorators for pattern demos.

Pattern modules mark their demo function with ``@pattern_demo(slug)``; the
registry collects them when the catalog is loaded, so adding a pattern never
requires editing a central list.
"""
from __future__ import annotations

from typing import Callable, Dict, List, TypeVar

DemoCallable = Callable[[], List[str]]
TDemo = TypeVar("TDemo", bound=DemoCallable)

# Demo registry (application-level abstraction)
_demo_registry: Dict[str, DemoCallable] = {}


def pattern_demo(slug: str):
    """
    Application-layer decorator to mark a pattern demo.

    Usage:
        @pattern_demo("strategy")
        def demo() -> List[str]:
            ...

    Args:
        slug: Catalog slug of the pattern the demo illustrates

    Returns:
        The undecorated demo function
    """
    def decorator(func: TDemo) -> TDemo:
        if slug in _demo_registry and _demo_registry[slug] is not func:
            raise ValueError(f"A demo is already registered for pattern '{slug}'")
        _demo_registry[slug] = func
        func._pattern_slug = slug
        return func

    return decorator


def get_registered_demos() -> Dict[str, DemoCallable]:
    """Get all registered demos (for infrastructure consumption)."""
    return _demo_registry.copy()


def get_demo_for_pattern(slug: str) -> DemoCallable:
    """Get the demo for a specific pattern slug."""
    if slug not in _demo_registry:
        raise KeyError(f"No demo registered for pattern: {slug}")
    return _demo_registry[slug]
