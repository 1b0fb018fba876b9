"""Middleware for observability: request/response logging."""

import logging
import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from soundhaven.infrastructure.observability.logging import (
    get_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


# Hey future me, this middleware logs EVERY HTTP request/response and owns the correlation id
# for the request. Add it early so it wraps everything else.
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging HTTP requests and responses."""

    def __init__(self, app: ASGIApp, skip_paths: tuple[str, ...] = ("/health",)) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            skip_paths: Path prefixes that are not logged (health probes)
        """
        super().__init__(app)
        self.skip_paths = skip_paths

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Process request and log details.

        Args:
            request: Incoming request
            call_next: Next middleware/handler in chain

        Returns:
            Response from application
        """
        set_correlation_id(request.headers.get("X-Correlation-ID"))

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"
        quiet = path.startswith(self.skip_paths)

        if not quiet:
            logger.info(
                f"→ {method} {path}",
                extra={
                    "method": method,
                    "path": path,
                    "query_params": str(request.query_params),
                    "client_ip": client_ip,
                },
            )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.exception(
                f"Request failed: {method} {path}",
                extra={
                    "method": method,
                    "path": path,
                    "duration_ms": int(duration_ms),
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                },
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if not quiet:
            status_mark = "✓" if response.status_code < 400 else "✗"
            logger.info(
                f"{status_mark} {method} {path} → {response.status_code} ({duration_ms:.0f}ms)",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": int(duration_ms),
                },
            )

        response.headers["X-Correlation-ID"] = get_correlation_id()
        return response
