"""Session-scoped, time-bounded plan context store."""

from plancontext.agents.sweeper import ContextSweeper
from plancontext.context import (
    ContextKey,
    ContextRecord,
    ContextStore,
    ContextStoreError,
    InvalidKey,
    InvalidTimeout,
)
from plancontext.runtime import PlanContextRuntime

__all__ = [
    "ContextKey",
    "ContextRecord",
    "ContextStore",
    "ContextStoreError",
    "ContextSweeper",
    "InvalidKey",
    "InvalidTimeout",
    "PlanContextRuntime",
]
