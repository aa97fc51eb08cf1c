import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from time import perf_counter

logger = logging.getLogger(__name__)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with origin, content type, status and duration"""

    async def dispatch(self, request: Request, call_next):
        started = perf_counter()
        response = await call_next(request)
        elapsed_ms = (perf_counter() - started) * 1000

        logger.info(
            "[Request] %s %s -> %d (%.1f ms) origin=%s content-type=%s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.headers.get("origin", "no origin"),
            request.headers.get("content-type", "no content-type"),
        )
        return response
