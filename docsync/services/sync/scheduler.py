"""Background reconciliation tied to the lifetime of a server process."""

import asyncio
import logging
from typing import Optional

from docsync.services.sync.engine import SyncEngine

logger = logging.getLogger(__name__)


class PeriodicReconciler:
    """Runs SyncEngine.reconcile on a fixed interval until stopped.

    Each pass runs in a worker thread so filesystem work never blocks the
    event loop. A failed pass is logged and the schedule continues.
    """

    def __init__(self, engine: SyncEngine, interval: float):
        """
        Initialize reconciler.

        Args:
            engine: Sync engine to run
            interval: Seconds between passes; the first pass runs after one interval
        """
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.engine = engine
        self.interval = interval
        self.passes = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="docsync-reconciler")
        logger.info("Background reconciliation every %ss", self.interval)

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Background reconciliation stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await asyncio.to_thread(self.engine.reconcile)
            except Exception:
                logger.exception("Background reconciliation failed")
            self.passes += 1
