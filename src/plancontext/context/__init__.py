from plancontext.context.errors import ContextStoreError, InvalidKey, InvalidTimeout
from plancontext.context.keys import ContextKey
from plancontext.context.store import ContextRecord, ContextStore

__all__ = [
    "ContextKey",
    "ContextRecord",
    "ContextStore",
    "ContextStoreError",
    "InvalidKey",
    "InvalidTimeout",
]
