"""
API Middleware

- Request logging with a per-request id bound into the structlog context
- Per-client sliding-window rate limiting
- Security headers
"""

import asyncio
import time
from collections import deque
from typing import Callable, Deque, Optional, Tuple

from cachetools import TTLCache
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

logger = structlog.get_logger(__name__)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its duration and echo the request id"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(time.time_ns())
        started = time.perf_counter()

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            logger.info(
                "Request started",
                method=request.method,
                path=request.url.path,
                query=request.url.query or None,
                client=_client_host(request),
            )
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(elapsed_ms, 2),
            )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.2f}ms"
        return response


class SlidingWindowLimiter:
    """
    Counts hits per key over a trailing window.

    Keys live in a TTLCache refreshed on every accepted hit, so a client
    idle for a full window is forgotten and at most max_clients are tracked.

    Example:
        limiter = SlidingWindowLimiter(limit=100, window_seconds=900)
        allowed, remaining = await limiter.hit("10.0.0.1")
    """

    def __init__(
        self,
        limit: int,
        window_seconds: float,
        clock: Optional[Callable[[], float]] = None,
        max_clients: int = 10_000,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._hits: TTLCache[str, Deque[float]] = TTLCache(
            maxsize=max_clients,
            ttl=window_seconds,
            timer=self._clock,
        )
        self._lock = asyncio.Lock()

    @property
    def tracked_clients(self) -> int:
        self._hits.expire()
        return len(self._hits)

    async def hit(self, key: str) -> Tuple[bool, int]:
        """Record a hit unless over the limit; returns (allowed, remaining)"""
        now = self._clock()
        async with self._lock:
            hits = self._hits.get(key) or deque()
            while hits and now - hits[0] >= self.window_seconds:
                hits.popleft()
            if len(hits) >= self.limit:
                return False, 0
            hits.append(now)
            # Re-assigning restarts the key's TTL
            self._hits[key] = hits
            return True, self.limit - len(hits)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Reject clients that exceed max_requests within window_seconds.

    State is per process, so each worker enforces its own budget.
    """

    def __init__(self, app, max_requests: int = 100, window_seconds: int = 900):
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(max_requests, window_seconds)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client = _client_host(request)
        allowed, remaining = await self.limiter.hit(client)
        limit_header = str(self.limiter.limit)

        if not allowed:
            logger.warning("Rate limit exceeded", client=client, limit=self.limiter.limit)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests from this IP, please try again later."},
                headers={
                    "Retry-After": str(int(self.limiter.window_seconds)),
                    "X-RateLimit-Limit": limit_header,
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = limit_header
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses"""

    headers = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
        "Content-Security-Policy": (
            "default-src 'self'; style-src 'self' 'unsafe-inline'; "
            "script-src 'self'; img-src 'self' data: https:"
        ),
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "Cross-Origin-Resource-Policy": "same-site",
    }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        response.headers.update(self.headers)
        return response
