"""
HTTP middleware for the WeatherSphere API.

Provides:
- Cache-Control headers (disabled in development, short-lived in production)
- Request logging with timing
"""
import logging
import time
from typing import Callable

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

DEV_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
    "Surrogate-Control": "no-store",
}
PROD_CACHE_HEADERS = {"Cache-Control": "public, max-age=300"}


class CacheControlMiddleware(BaseHTTPMiddleware):
    """Sets caching headers on every response."""

    def __init__(self, app, production: bool = False):
        super().__init__(app)
        self.headers = PROD_CACHE_HEADERS if production else DEV_CACHE_HEADERS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, query, status and duration of each request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        query = f"?{request.query_params}" if request.query_params else ""

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{request.method} {request.url.path}{query} failed after "
                f"{duration_ms:.1f}ms: {type(e).__name__}: {e}"
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path}{query} -> {response.status_code} "
            f"({duration_ms:.1f}ms)"
        )
        return response


def setup_middleware(app: FastAPI, production: bool = False) -> None:
    """
    Configure middleware for the application.

    Middleware is executed in reverse order of addition.
    """
    app.add_middleware(CacheControlMiddleware, production=production)
    app.add_middleware(RequestLoggingMiddleware)
