"""
Request Logging Middleware
Tracks every request with a correlation ID, status and timing
"""
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from configmaster.utils.logging import get_api_logger

CORRELATION_ID_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for request/response logging
    """

    def __init__(self, app, log_requests: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.api_logger = get_api_logger()

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = str(uuid.uuid4())

        client_ip = self._get_client_ip(request)
        request_method = request.method
        request_path = str(request.url.path)

        start_time = time.time()

        if self.log_requests:
            self.api_logger.debug(
                f"Incoming {request_method} request to {request_path}",
                extra={
                    'correlation_id': correlation_id,
                    'method': request_method,
                    'path': request_path,
                    'client_ip': client_ip,
                    'user_agent': request.headers.get("user-agent", "unknown"),
                    'event_type': 'api_request'
                }
            )

        try:
            response = await call_next(request)
        except Exception as e:
            processing_time = time.time() - start_time

            self.api_logger.error(
                f"Request failed: {request_method} {request_path}",
                extra={
                    'correlation_id': correlation_id,
                    'method': request_method,
                    'path': request_path,
                    'error_type': type(e).__name__,
                    'processing_time_ms': round(processing_time * 1000, 2),
                    'client_ip': client_ip,
                    'event_type': 'api_error'
                },
                exc_info=True
            )
            raise

        processing_time = time.time() - start_time

        if self.log_requests:
            self.api_logger.info(
                f"Response {response.status_code} for {request_method} {request_path}",
                extra={
                    'correlation_id': correlation_id,
                    'method': request_method,
                    'path': request_path,
                    'status_code': response.status_code,
                    'processing_time_ms': round(processing_time * 1000, 2),
                    'client_ip': client_ip,
                    'event_type': 'api_response'
                }
            )

        if response.status_code == 404:
            self.api_logger.warning(
                f"Endpoint not found: {request_method} {request_path}",
                extra={
                    'correlation_id': correlation_id,
                    'client_ip': client_ip,
                    'event_type': 'endpoint_not_found'
                }
            )

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request"""
        # Check for forwarded headers (common in reverse proxy setups)
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"
