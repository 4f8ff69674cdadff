"""Services backing the API routes."""

__all__ = ["HybridCache", "Repository", "SchedulerService"]

from meterbill.api.services.cache import HybridCache
from meterbill.api.services.repository import Repository
from meterbill.api.services.scheduler import SchedulerService
