"""Error handling infrastructure package."""
from behavioral_patterns.infrastructure.error.exception_handler import (
    ErrorCategory,
    ErrorCode,
    ErrorResponse,
    ExceptionHandler,
    get_exception_handler,
)

__all__ = [
    "ErrorCategory",
    "ErrorCode",
    "ErrorResponse",
    "ExceptionHandler",
    "get_exception_handler",
]
