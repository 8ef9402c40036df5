"""
Behavioral pattern implementations.

One module per pattern. Importing this package registers every pattern demo.
"""
from . import (  # noqa: F401
    chain_of_responsibility,
    command,
    mediator,
    observer,
    state,
    strategy,
    template_method,
    visitor,
)
