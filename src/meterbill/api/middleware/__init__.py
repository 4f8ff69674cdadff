"""API middleware for cross-cutting concerns."""

__all__ = ["RateLimitMiddleware", "ErrorHandlerMiddleware"]

from meterbill.api.middleware.error_handler import ErrorHandlerMiddleware
from meterbill.api.middleware.rate_limit import RateLimitMiddleware
