"""Package metadata and naming constants."""

PACKAGE_NAME = "behavioral-patterns"
PACKAGE_NAME_SHORT = "bpatterns"
__version__ = "1.0.0"
VERSION = __version__
DESCRIPTION = "Executable catalog of the classical behavioral design patterns"

# Derived values
PACKAGE_NAME_PYTHON = PACKAGE_NAME.replace("-", "_")
ENV_PREFIX = "BP_"
