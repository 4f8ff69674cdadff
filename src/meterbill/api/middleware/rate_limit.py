"""Per-user rate limiting middleware backed by a TTL cache."""

import logging
import time

from cachetools import TTLCache
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from meterbill.api.dependencies import verify_token

logger = logging.getLogger(__name__)

EXEMPT_PATHS = frozenset({"/", "/health", "/docs", "/openapi.json", "/redoc"})


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window request limit per authenticated user.

    Requests without a valid bearer token pass through untouched; the
    endpoint's own authentication rejects them.

    Attributes
    ----------
    limit : int
        Maximum requests per window, 0 disables limiting
    window : int
        Window length in seconds
    requests : TTLCache
        Request timestamps per user id, dropped after a quiet window
    """

    def __init__(self, app, limit: int = 100, window: int = 3600):
        """Initialize rate limiter.

        Parameters
        ----------
        app : ASGIApp
            Wrapped application
        limit : int, optional
            Maximum requests per window, by default 100
        window : int, optional
            Window length in seconds, by default 3600 (1 hour)
        """
        super().__init__(app)
        self.limit = limit
        self.window = window
        self.requests: TTLCache = TTLCache(maxsize=10000, ttl=window)

        logger.info(f"Rate limiter initialized: {limit} req/{window}s")

    def _user_id(self, request: Request) -> int | None:
        auth_header = request.headers.get("Authorization", "")
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            return None
        try:
            return verify_token(token).user_id
        except HTTPException:
            return None

    async def dispatch(self, request: Request, call_next):
        """Process request with rate limiting.

        Parameters
        ----------
        request : Request
            Incoming HTTP request
        call_next : callable
            Next middleware in chain

        Returns
        -------
        Response
            HTTP response with ``X-RateLimit-*`` headers
        """
        if (
            self.limit <= 0
            or request.url.path in EXEMPT_PATHS
            or request.url.path.startswith("/auth")
        ):
            return await call_next(request)

        user_id = self._user_id(request)
        if user_id is None:
            return await call_next(request)

        now = time.time()
        recent = [ts for ts in self.requests.get(user_id, []) if now - ts < self.window]

        if len(recent) >= self.limit:
            retry_after = max(1, int(self.window - (now - recent[0])))
            logger.warning(f"Rate limit exceeded for user {user_id}")
            return JSONResponse(
                status_code=429,
                content={
                    "detail": f"Rate limit exceeded. Try again in {retry_after} seconds.",
                    "retry_after": retry_after,
                },
                headers={
                    "X-RateLimit-Limit": str(self.limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(int(now + retry_after)),
                    "Retry-After": str(retry_after),
                },
            )

        recent.append(now)
        self.requests[user_id] = recent

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.limit)
        response.headers["X-RateLimit-Remaining"] = str(self.limit - len(recent))
        response.headers["X-RateLimit-Reset"] = str(int(recent[0] + self.window))
        return response
