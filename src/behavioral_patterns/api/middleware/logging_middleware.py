"""Logging middleware for FastAPI."""
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from behavioral_patterns.infrastructure.logging.logger import get_logger

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request and tags the response with a request id."""

    def __init__(self, app, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses
        self.logger = get_logger(__name__)

    async def dispatch(self, request: Request, call_next):
        # Honour an incoming request id
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        if self.log_requests:
            self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            self._log_error(request, e, request_id, time.perf_counter() - start_time)
            raise

        if self.log_responses:
            self._log_response(request, response, request_id, time.perf_counter() - start_time)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _log_request(self, request: Request, request_id: str):
        client_ip = request.client.host if request.client else "unknown"
        self.logger.info(f"Request {request_id}: {request.method} {request.url.path} from {client_ip}")
        if request.query_params:
            self.logger.debug(f"Request {request_id} query params: {dict(request.query_params)}")

    def _log_response(self, request: Request, response: Response, request_id: str, duration: float):
        self.logger.info(
            f"Response {request_id}: {response.status_code} "
            f"for {request.method} {request.url.path} (duration: {duration:.3f}s)"
        )

    def _log_error(self, request: Request, error: Exception, request_id: str, duration: float):
        self.logger.error(
            f"Error {request_id}: {type(error).__name__}: {error} "
            f"for {request.method} {request.url.path} (duration: {duration:.3f}s)"
        )
