"""Error handling middleware for consistent error responses."""

import logging
from datetime import datetime

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from meterbill.exceptions.errors import (
    InvalidConsumptionError,
    InvalidReadingError,
    InvalidTariffClassError,
    LoginError,
    ProfileNotFoundError,
    ReadingNotFoundError,
    UserExistsError,
)

logger = logging.getLogger(__name__)

# Checked in order, so subclasses of ValueError come before ValueError itself.
ERROR_RESPONSES: tuple[tuple[type[Exception], int, str, int], ...] = (
    (ProfileNotFoundError, 404, "PROFILE_NOT_FOUND", logging.INFO),
    (ReadingNotFoundError, 404, "READING_NOT_FOUND", logging.INFO),
    (LoginError, 401, "AUTHENTICATION_FAILED", logging.WARNING),
    (UserExistsError, 409, "USER_EXISTS", logging.INFO),
    (InvalidReadingError, 400, "INVALID_READING", logging.WARNING),
    (InvalidConsumptionError, 400, "INVALID_CONSUMPTION", logging.WARNING),
    (InvalidTariffClassError, 400, "INVALID_TARIFF_CLASS", logging.WARNING),
    (ValueError, 400, "VALIDATION_ERROR", logging.WARNING),
)


def error_response(status_code: int, detail: str, error_code: str) -> JSONResponse:
    """Build the JSON body shared by every error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": detail,
            "error_code": error_code,
            "timestamp": datetime.now().isoformat(),
        },
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for turning meterbill exceptions into JSON errors.

    Known exceptions map to 4xx responses with an ``error_code``; anything
    else is logged with its traceback and returned as a generic 500.
    """

    async def dispatch(self, request: Request, call_next):
        """Process request with error handling.

        Parameters
        ----------
        request : Request
            Incoming HTTP request
        call_next : callable
            Next middleware in chain

        Returns
        -------
        Response
            HTTP response, potentially error response
        """
        try:
            return await call_next(request)
        except Exception as e:
            for error_type, status_code, error_code, level in ERROR_RESPONSES:
                if isinstance(e, error_type):
                    logger.log(level, f"{error_code} on {request.method} {request.url.path}: {e}")
                    return error_response(status_code, str(e), error_code)

            # Log with full traceback for debugging
            logger.error(f"Unhandled error: {e}", exc_info=True)
            return error_response(500, "Internal server error", "INTERNAL_ERROR")
