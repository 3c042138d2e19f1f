# src/plancontext/context/store.py
from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import timedelta

from loguru import logger

from plancontext.context.errors import InvalidTimeout
from plancontext.context.keys import ContextKey, require_id

DEFAULT_CONTEXT_TIMEOUT_SEC = 10 * 60


def _to_seconds(timeout: float | timedelta, name: str = "timeout") -> float:
    if isinstance(timeout, timedelta):
        seconds = timeout.total_seconds()
    elif isinstance(timeout, (int, float)) and not isinstance(timeout, bool):
        seconds = float(timeout)
    else:
        raise InvalidTimeout(f"{name} must be a number of seconds or a timedelta, got {timeout!r}")

    if not seconds > 0:
        raise InvalidTimeout(f"{name} must be strictly positive, got {timeout!r}")
    return seconds


@dataclass(frozen=True)
class ContextRecord:
    reference_id: str
    primary_key: str
    secondary_key: str | None
    activated_at: float
    expires_at: float

    @property
    def key(self) -> ContextKey:
        return ContextKey(self.primary_key, self.secondary_key)

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at

    def remaining(self, now: float) -> float:
        return max(0.0, self.expires_at - now)


class ContextStore:
    """
    In-memory, TTL-bound mapping from (project, session?) to an active plan id.

    Expired records are never returned: reads evict them lazily and sweep()
    removes them in bulk. Reads do not renew a record; only extend() does.
    Every operation runs under a single lock, so callers and the background
    sweeper never observe a half-updated mapping.
    """

    def __init__(
        self,
        default_timeout: float | timedelta = DEFAULT_CONTEXT_TIMEOUT_SEC,
        *,
        clock: Callable[[], float] = time.time,
    ):
        self.default_timeout = _to_seconds(default_timeout, "default_timeout")
        self._clock = clock
        self._lock = threading.Lock()
        self._contexts: dict[ContextKey, ContextRecord] = {}

    def now(self) -> float:
        return self._clock()

    def _timeout(self, timeout: float | timedelta | None) -> float:
        return self.default_timeout if timeout is None else _to_seconds(timeout)

    def _live(self, key: ContextKey, now: float) -> ContextRecord | None:
        # Caller holds the lock
        record = self._contexts.get(key)
        if record is None:
            return None
        if record.is_expired(now):
            del self._contexts[key]
            logger.debug(f"Plan context expired for {key}")
            return None
        return record

    # ---------- operations ----------
    def activate(
        self,
        reference_id: str,
        primary_key: str,
        secondary_key: str | None = None,
        timeout: float | timedelta | None = None,
    ) -> ContextRecord:
        """Set the active plan for a project/session, replacing any previous one."""
        require_id(reference_id, "reference_id")
        key = ContextKey.of(primary_key, secondary_key)
        ttl = self._timeout(timeout)

        with self._lock:
            now = self._clock()
            record = ContextRecord(
                reference_id=reference_id,
                primary_key=key.primary,
                secondary_key=key.secondary,
                activated_at=now,
                expires_at=now + ttl,
            )
            self._contexts[key] = record

        logger.info(f"Active plan set: {reference_id} for {key} (ttl={ttl:g}s)")
        return record

    def get_record(self, primary_key: str, secondary_key: str | None = None) -> ContextRecord | None:
        key = ContextKey.of(primary_key, secondary_key)
        with self._lock:
            return self._live(key, self._clock())

    def lookup(self, primary_key: str, secondary_key: str | None = None) -> str | None:
        """Return the active plan id for a project/session, or None."""
        record = self.get_record(primary_key, secondary_key)
        return record.reference_id if record else None

    def clear(self, primary_key: str, secondary_key: str | None = None) -> bool:
        """Drop the record for a project/session. Expired-but-unswept records count as present."""
        key = ContextKey.of(primary_key, secondary_key)
        with self._lock:
            record = self._contexts.pop(key, None)

        if record is None:
            return False
        logger.info(f"Cleared active plan {record.reference_id} for {key}")
        return True

    def extend(
        self,
        primary_key: str,
        secondary_key: str | None = None,
        additional_timeout: float | timedelta | None = None,
    ) -> bool:
        """
        Push the expiry to now + additional_timeout.

        The horizon is measured from the current time, not from the old expiry,
        and an expired record that has not been swept yet is revived.
        """
        key = ContextKey.of(primary_key, secondary_key)
        ttl = self._timeout(additional_timeout)

        with self._lock:
            record = self._contexts.get(key)
            if record is None:
                return False
            record = replace(record, expires_at=self._clock() + ttl)
            self._contexts[key] = record

        logger.info(f"Extended plan context for {key} by {ttl:g}s")
        return True

    def list_active(self) -> list[ContextRecord]:
        """Snapshot of every live record (order unspecified); expired ones are evicted on the way."""
        with self._lock:
            now = self._clock()
            active: list[ContextRecord] = []
            for key, record in list(self._contexts.items()):
                if record.is_expired(now):
                    del self._contexts[key]
                else:
                    active.append(record)
            return active

    def sweep(self) -> int:
        """Remove all expired records and return how many were dropped."""
        with self._lock:
            now = self._clock()
            expired = [key for key, record in self._contexts.items() if record.is_expired(now)]
            for key in expired:
                del self._contexts[key]

        if expired:
            logger.info(f"Cleaned up {len(expired)} expired plan contexts")
        return len(expired)

    # ---------- inspection ----------
    def __len__(self) -> int:
        with self._lock:
            return len(self._contexts)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._contexts
