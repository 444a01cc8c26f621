"""Logging middleware for request/response tracking."""

import logging
import time
import uuid
from typing import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from cinecollection.core.settings import get_settings

settings = get_settings()


# Configure structured logging
def configure_logging():
    """Configure structured logging with JSON output."""
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, settings.log_level),
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Log every request and its outcome with timing.

    Runs outside the authentication middleware, so the user id is read from
    request state after the downstream call has resolved it.
    """

    SENSITIVE_HEADERS = {"authorization", "cookie", "x-api-key", "x-auth-token"}

    def __init__(self, app, logger_name: str = "cinecollection.http"):
        super().__init__(app)
        self.logger = structlog.get_logger(logger_name)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request with structured logging."""
        request_id = str(uuid.uuid4())
        start_time = time.time()

        method = request.method
        path = request.url.path
        client_ip = self._get_client_ip(request)

        request_data = {
            "request_id": request_id,
            "method": method,
            "path": path,
            "query_params": dict(request.query_params),
            "client_ip": client_ip,
            "user_agent": request.headers.get("user-agent", ""),
        }
        if settings.debug:
            request_data["headers"] = self._sanitize_headers(dict(request.headers))

        self.logger.info("HTTP request started", **request_data)
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except Exception as e:
            self.logger.error(
                "HTTP request failed with exception",
                request_id=request_id,
                method=method,
                path=path,
                error_type=type(e).__name__,
                error_message=str(e),
                process_time_ms=round((time.time() - start_time) * 1000, 2),
                client_ip=client_ip,
            )
            raise

        process_time = time.time() - start_time
        response_data = {
            "request_id": request_id,
            "method": method,
            "path": path,
            "status_code": response.status_code,
            "process_time_ms": round(process_time * 1000, 2),
            "user_id": getattr(request.state, "user_id", None),
            "client_ip": client_ip,
        }

        if response.status_code < 400:
            self.logger.info("HTTP request completed successfully", **response_data)
        elif response.status_code < 500:
            self.logger.warning("HTTP request completed with client error", **response_data)
        else:
            self.logger.error("HTTP request completed with server error", **response_data)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address with proxy support."""
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"

    def _sanitize_headers(self, headers: dict) -> dict:
        """Remove sensitive information from headers."""
        return {
            key: "[REDACTED]" if key.lower() in self.SENSITIVE_HEADERS else value
            for key, value in headers.items()
        }
