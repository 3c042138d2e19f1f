# src/plancontext/context/keys.py
from __future__ import annotations

from typing import NamedTuple

from plancontext.context.errors import InvalidKey


def require_id(value: object, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidKey(f"{name} must be a non-empty string, got {value!r}")
    return value


class ContextKey(NamedTuple):
    """
    Composite key for one project/session scope.

    Used directly as the mapping key, so no delimiter can make
    ("a:b", None) and ("a", "b") collide.
    """

    primary: str
    secondary: str | None = None

    @classmethod
    def of(cls, primary_key: str, secondary_key: str | None = None) -> "ContextKey":
        primary = require_id(primary_key, "primary_key")
        if secondary_key is None or secondary_key == "":
            # A falsy session id means "project-wide"
            return cls(primary, None)
        return cls(primary, require_id(secondary_key, "secondary_key"))

    def __str__(self) -> str:
        # Display only; never used for lookups
        return self.primary if self.secondary is None else f"{self.primary}:{self.secondary}"
