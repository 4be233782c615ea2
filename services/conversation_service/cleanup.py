"""
Scheduled expiry of old conversations.

The sweep runs on a fixed interval in a background asyncio task started by the
application. A lock makes overlapping sweeps (the scheduler and a manual
``conversations/cleanup`` call, say) skip instead of deleting twice.
"""
import asyncio
from contextlib import suppress
from typing import Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.config.database import AsyncSessionLocal
from shared.config.settings import CONVERSATION_CLEANUP_INTERVAL_SECONDS, CONVERSATION_MAX_AGE_DAYS
from .service import ConversationService

logger = structlog.get_logger(__name__)


class ConversationCleanupTask:
    def __init__(
        self,
        session_factory: async_sessionmaker = AsyncSessionLocal,
        max_age_days: int = CONVERSATION_MAX_AGE_DAYS,
        interval_seconds: float = CONVERSATION_CLEANUP_INTERVAL_SECONDS,
    ):
        self.session_factory = session_factory
        self.max_age_days = max_age_days
        self.interval_seconds = interval_seconds
        self._lock = asyncio.Lock()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self, days: Optional[int] = None, db: Optional[AsyncSession] = None) -> int:
        """Runs one sweep and returns the number of conversations deleted (0 if skipped)."""
        if self._lock.locked():
            logger.info("conversation_cleanup_skipped", reason="sweep already running")
            return 0

        days = self.max_age_days if days is None else days
        async with self._lock:
            if db is not None:
                return await ConversationService.expire_older_than(db, days)
            async with self.session_factory() as session:
                return await ConversationService.expire_older_than(session, days)

    async def _run_forever(self):
        while True:
            try:
                await self.run_once()
            except Exception as e:
                # A failed sweep must not stop the schedule
                logger.error("conversation_cleanup_failed", error=str(e), exc_info=True)
            await asyncio.sleep(self.interval_seconds)

    def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._run_forever(), name="conversation-cleanup")
        logger.info(
            "conversation_cleanup_scheduled",
            interval_seconds=self.interval_seconds,
            max_age_days=self.max_age_days,
        )

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None


cleanup_task = ConversationCleanupTask()
