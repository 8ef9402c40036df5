"""API middleware."""
from behavioral_patterns.api.middleware.logging_middleware import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
