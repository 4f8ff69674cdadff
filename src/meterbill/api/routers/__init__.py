"""API route handlers."""

__all__ = ["auth_router", "profiles_router", "readings_router", "tariffs_router"]

from meterbill.api.routers.auth import router as auth_router
from meterbill.api.routers.profiles import router as profiles_router
from meterbill.api.routers.readings import router as readings_router
from meterbill.api.routers.tariffs import router as tariffs_router
