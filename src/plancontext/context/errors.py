# src/plancontext/context/errors.py
from __future__ import annotations


class ContextStoreError(Exception):
    """Base class for errors raised by the plan context store."""


class InvalidKey(ContextStoreError, ValueError):
    """A required identifier (reference id or primary key) is missing or empty."""


class InvalidTimeout(ContextStoreError, ValueError):
    """A timeout was zero, negative or not a number."""
