"""Resolve snippet references to the source code they point at."""
import importlib
import inspect
import textwrap
from functools import lru_cache
from typing import Any, Union

from behavioral_patterns.domain.catalog import SnippetReference
from behavioral_patterns.domain.core.exceptions import SnippetResolutionError


def resolve_object(reference: Union[str, SnippetReference]) -> Any:
    """Import the module and walk the qualified name to the target object."""
    if isinstance(reference, str):
        try:
            reference = SnippetReference.parse(reference)
        except ValueError as e:
            raise SnippetResolutionError(reference, str(e))

    try:
        target = importlib.import_module(reference.module)
    except ImportError as e:
        raise SnippetResolutionError(str(reference), f"module not importable ({e})")

    for attribute in reference.qualname.split("."):
        try:
            target = getattr(target, attribute)
        except AttributeError:
            raise SnippetResolutionError(str(reference), f"no attribute {attribute!r}")
    # Properties carry their source on the getter
    if isinstance(target, property):
        target = target.fget
    return target


@lru_cache(maxsize=128)
def _source_for(reference: str) -> str:
    target = resolve_object(reference)
    try:
        source = inspect.getsource(target)
    except (OSError, TypeError) as e:
        raise SnippetResolutionError(reference, f"source not available ({e})")
    return textwrap.dedent(source).rstrip() + "\n"


def resolve_snippet(reference: Union[str, SnippetReference]) -> str:
    """
    Return the dedented source of the referenced class or function.

    Raises:
        SnippetResolutionError: If the module, attribute or source is unavailable
    """
    return _source_for(str(reference))
