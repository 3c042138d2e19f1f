# src/plancontext/agents/sweeper.py
from __future__ import annotations

import asyncio

from apscheduler.schedulers.background import BackgroundScheduler
from loguru import logger
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from plancontext.context.store import ContextStore


class ContextSweeper:
    """
    Periodically removes expired records from a ContextStore.

    Two ways to drive it:

    1) APScheduler interval job (background thread) via start()/stop()
    2) An asyncio loop via run_periodic() for cooperative hosts

    The APScheduler instance is injectable so tests can stub/spy it.
    """

    def __init__(
        self,
        store: "ContextStore",
        interval_sec: float = 300.0,
        *,
        apscheduler: BackgroundScheduler | None = None,
        job_id: str = "plan-context:sweep",
    ):
        if interval_sec <= 0:
            raise ValueError(f"interval_sec must be positive, got {interval_sec!r}")

        self.store = store
        self.interval_sec = interval_sec
        self.job_id = job_id
        self.scheduler = apscheduler or BackgroundScheduler()
        self._owns_scheduler = apscheduler is None
        self._shut_down = False
        self.running = False

    def sweep_once(self) -> int:
        """Run a single sweep; failures are logged so the timer keeps firing."""
        try:
            return self.store.sweep()
        except Exception as e:
            logger.exception(f"[ContextSweeper] sweep failed: {e}")
            return 0

    async def run_periodic(self, interval_sec: float | None = None) -> None:
        """Sweep, then sleep, until cancelled."""
        interval = self.interval_sec if interval_sec is None else interval_sec
        while True:
            self.sweep_once()
            await asyncio.sleep(interval)

    def start(self) -> None:
        if self.running:
            return
        if self._shut_down:
            # A shut-down APScheduler cannot submit jobs again
            if not self._owns_scheduler:
                raise RuntimeError("injected scheduler was shut down; pass a fresh one to restart")
            self.scheduler = BackgroundScheduler()
            self._shut_down = False

        self.scheduler.add_job(
            self.sweep_once,
            "interval",
            seconds=self.interval_sec,
            id=self.job_id,
            replace_existing=True,
        )
        self.scheduler.start()
        self.running = True
        logger.info(f"[ContextSweeper] sweeping every {self.interval_sec:g}s")

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        self._shut_down = True

        # Do not hang on shutdown; an in-flight sweep is short
        try:
            self.scheduler.shutdown(wait=False)
        except Exception as e:
            logger.warning(f"[ContextSweeper] shutdown() raised: {e}")

        logger.info("ContextSweeper stopped.")
