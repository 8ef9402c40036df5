"""Behavioral Patterns - Root Package.

This package is an executable catalog of the classical behavioral design
patterns from the Gang-of-Four book: Strategy, Observer, Command, Template
Method, Chain of Responsibility, Visitor, State and Mediator.

Every pattern is implemented as a small, self-contained module with a
deterministic demo, and described by a structured catalog entry that is used
to render the catalog README.

Key Components:
    - patterns: One module per behavioral pattern
    - domain: Catalog models, domain events and exceptions
    - application: Catalog service, validation and demo registration
    - infrastructure: Catalog loading, registry, rendering, logging, errors
    - cli / api: Command line and HTTP interfaces
"""

from ._package import PACKAGE_NAME, __version__

__author__ = "Behavioral Patterns Maintainers"
__package_name__ = PACKAGE_NAME

__all__ = ["__version__", "__package_name__"]

"""
Usage:
    >>> bpatterns patterns list --format table
    >>> bpatterns patterns demo strategy
    >>> bpatterns catalog readme --output README.md
"""
