"""Exception handler - maps exceptions to consistent error responses."""
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type

from behavioral_patterns.domain.core.exceptions import (
    CatalogValidationError,
    ConfigurationError,
    DemoExecutionError,
    DomainException,
    InvalidStateTransitionError,
    ResourceNotFoundError,
    RetryLimitExceededError,
    ValidationError,
)
from behavioral_patterns.infrastructure.logging.logger import get_logger


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STATE = "state"
    CONFIGURATION = "configuration"
    DOMAIN = "domain"
    INTERNAL = "internal"


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CATALOG_INVALID = "CATALOG_INVALID"
    NOT_FOUND = "NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    DEMO_FAILED = "DEMO_FAILED"
    DOMAIN_ERROR = "DOMAIN_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse:
    """Interface-neutral description of an error."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        category: ErrorCategory,
        http_status: int,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.category = category
        self.http_status = http_status
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "category": self.category.value,
                "details": self.details,
            },
            "timestamp": self.timestamp,
        }


# Most specific first; the first matching entry wins.
_ERROR_MAP: List[Tuple[Type[Exception], ErrorCode, ErrorCategory, int]] = [
    (CatalogValidationError, ErrorCode.CATALOG_INVALID, ErrorCategory.VALIDATION, 400),
    (ValidationError, ErrorCode.VALIDATION_ERROR, ErrorCategory.VALIDATION, 400),
    (ResourceNotFoundError, ErrorCode.NOT_FOUND, ErrorCategory.NOT_FOUND, 404),
    (InvalidStateTransitionError, ErrorCode.INVALID_STATE, ErrorCategory.STATE, 409),
    (RetryLimitExceededError, ErrorCode.INVALID_STATE, ErrorCategory.STATE, 409),
    (ConfigurationError, ErrorCode.CONFIGURATION_ERROR, ErrorCategory.CONFIGURATION, 500),
    (DemoExecutionError, ErrorCode.DEMO_FAILED, ErrorCategory.DOMAIN, 422),
    (DomainException, ErrorCode.DOMAIN_ERROR, ErrorCategory.DOMAIN, 422),
]


class ExceptionHandler:
    """Maps exceptions to ``ErrorResponse`` objects and logs them."""

    def __init__(self, logger: Optional[Any] = None):
        self._logger = logger or get_logger(__name__)

    def handle_error(self, exception: Exception) -> ErrorResponse:
        for exc_type, code, category, status in _ERROR_MAP:
            if isinstance(exception, exc_type):
                response = ErrorResponse(
                    error_code=code,
                    message=str(exception),
                    category=category,
                    http_status=status,
                    details=self._details(exception),
                )
                self._logger.warning(f"{type(exception).__name__}: {exception}")
                return response

        self._logger.error(f"Unexpected error: {exception}", exc_info=exception)
        return ErrorResponse(
            error_code=ErrorCode.INTERNAL_ERROR,
            message=f"Unexpected error: {exception}",
            category=ErrorCategory.INTERNAL,
            http_status=500,
            details={"exception_type": type(exception).__name__},
        )

    # The HTTP layer uses the same mapping
    handle_error_for_http = handle_error

    @staticmethod
    def _details(exception: Exception) -> Dict[str, Any]:
        details: Dict[str, Any] = {"exception_type": type(exception).__name__}
        if isinstance(exception, CatalogValidationError):
            details["errors"] = exception.errors
        elif isinstance(exception, ValidationError) and exception.details is not None:
            details["details"] = exception.details
        if isinstance(exception, ResourceNotFoundError):
            details["resource_type"] = exception.resource_type
            details["resource_id"] = exception.resource_id
        if isinstance(exception, ConfigurationError) and exception.missing_fields:
            details["missing_fields"] = exception.missing_fields
        return details


_handler_instance: Optional[ExceptionHandler] = None
_handler_lock = threading.Lock()


def get_exception_handler() -> ExceptionHandler:
    """Get the shared exception handler."""
    global _handler_instance
    if _handler_instance is None:
        with _handler_lock:
            if _handler_instance is None:
                _handler_instance = ExceptionHandler()
    return _handler_instance
