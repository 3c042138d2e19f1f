# src/plancontext/runtime.py
from __future__ import annotations

from loguru import logger
from typing import TYPE_CHECKING, Any

from plancontext.agents.sweeper import ContextSweeper
from plancontext.context.store import ContextStore


if TYPE_CHECKING:
    from config.config import Settings


class PlanContextRuntime:
    """
    Owns one ContextStore and the sweeper that keeps it clean.

    Build it once at process start, hand `runtime.store` to the request layer,
    and call stop() on shutdown.
    """

    def __init__(self, store: ContextStore, sweeper: ContextSweeper):
        self.store = store
        self.sweeper = sweeper

    @classmethod
    def from_settings(cls, settings: "Settings", **sweeper_kwargs: Any) -> "PlanContextRuntime":
        store = ContextStore(default_timeout=settings.default_timeout_sec)
        sweeper = ContextSweeper(store, settings.sweep_interval_sec, **sweeper_kwargs)
        return cls(store, sweeper)

    @property
    def running(self) -> bool:
        return self.sweeper.running

    def start(self) -> "PlanContextRuntime":
        if self.running:
            return self
        self.sweeper.start()
        logger.info(f"Plan context runtime started (default ttl={self.store.default_timeout:g}s)")
        return self

    def stop(self) -> None:
        self.sweeper.stop()

    def __enter__(self) -> "PlanContextRuntime":
        return self.start()

    def __exit__(self, *exc: object) -> None:
        self.stop()
