"""Logging infrastructure."""
from .logger import get_logger, get_structured_logger, setup_logging

__all__ = ["get_logger", "get_structured_logger", "setup_logging"]
