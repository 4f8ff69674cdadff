"""Background maintenance jobs using APScheduler."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from meterbill.api.database import Database
from meterbill.api.services.cache import HybridCache

logger = logging.getLogger(__name__)


class SchedulerService:
    """Periodic cache cleanup and SQLite maintenance.

    Attributes
    ----------
    scheduler : AsyncIOScheduler
        APScheduler instance for async jobs
    cache : HybridCache
        Cache to clean up
    db : Database
        Database to optimize
    """

    def __init__(self, cache: HybridCache, db: Database, cleanup_interval: int = 60):
        """Initialize scheduler service.

        Parameters
        ----------
        cache : HybridCache
            Cache to clean up
        db : Database
            Database to optimize
        cleanup_interval : int, optional
            Minutes between cache cleanups, by default 60
        """
        self.scheduler = AsyncIOScheduler()
        self.cache = cache
        self.db = db
        self.cleanup_interval = cleanup_interval

    def start(self):
        """Register the jobs and start the scheduler."""
        self.scheduler.add_job(
            self.cleanup_cache,
            "interval",
            minutes=self.cleanup_interval,
            id="cleanup_cache",
            name="Cache Cleanup",
            replace_existing=True,
        )
        self.scheduler.add_job(
            self.optimize_database,
            "interval",
            hours=24,
            id="optimize_database",
            name="SQLite Optimize",
            replace_existing=True,
        )

        self.scheduler.start()
        logger.info(f"Scheduler started, cache cleanup every {self.cleanup_interval} min")

    async def cleanup_cache(self):
        """Expire and cull cache entries."""
        logger.info("Running cache cleanup job...")
        try:
            self.cache.cleanup()
        except Exception as e:
            logger.error(f"Cache cleanup failed: {e}", exc_info=True)

    async def optimize_database(self):
        """Refresh SQLite query planner statistics."""
        try:
            await self.db.optimize()
            logger.info("Database optimized")
        except Exception as e:
            logger.error(f"Database optimize failed: {e}", exc_info=True)

    def shutdown(self):
        """Shutdown the scheduler gracefully."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
        logger.info("Scheduler shutdown complete")
