# src/plancontext/repl/commands.py
from __future__ import annotations

import re
from datetime import datetime

from tabulate import tabulate

from plancontext.context.errors import ContextStoreError
from plancontext.context.store import ContextStore


HELP = """
Available commands:
  activate <plan> <project> [session] [--timeout SEC]
  lookup <project> [session]
  clear <project> [session]
  extend <project> [session] [--timeout SEC]
  list
  sweep
  help
"""

_TIMEOUT_RE = re.compile(r"\s--timeout(?:=|\s+)(\S+)")
_TIMEOUT_COMMANDS = {"activate", "extend"}


def _split_timeout(text: str) -> tuple[str, float | None] | str:
    """Pull an optional --timeout out of the line. Returns an error string on bad input."""
    match = _TIMEOUT_RE.search(" " + text)
    if not match:
        rest, timeout = text, None
    else:
        try:
            timeout = float(match.group(1))
        except ValueError:
            return f"Invalid timeout: {match.group(1)!r}"
        rest = ((" " + text)[: match.start()] + (" " + text)[match.end():]).strip()

    # A bare or repeated flag must not leak into the positional args
    if any(tok.startswith("--timeout") for tok in rest.split()):
        return "Usage: --timeout SEC (given once, with a value)"
    return rest, timeout


def _fmt_ts(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def _format_active(store: ContextStore) -> str:
    records = store.list_active()
    if not records:
        return "No active plan contexts."
    now = store.now()
    rows = sorted(
        (
            str(r.key),
            r.reference_id,
            _fmt_ts(r.activated_at),
            _fmt_ts(r.expires_at),
            f"{r.remaining(now):.0f}s",
        )
        for r in records
    )
    return tabulate(rows, headers=["Key", "Plan", "Activated", "Expires", "Left"])


def handle_command(store: ContextStore, text: str) -> str | None:
    """Run one REPL line against the store. Unknown commands return None."""
    parsed = _split_timeout(text.strip())
    if isinstance(parsed, str):
        return parsed
    line, timeout = parsed

    tokens = line.split()
    if not tokens:
        return ""
    cmd, args = tokens[0].lower(), tokens[1:]
    if timeout is not None and cmd not in _TIMEOUT_COMMANDS:
        return f"Usage: {cmd} does not take --timeout"

    try:
        if cmd == "help":
            return HELP.strip()

        if cmd == "activate":
            if len(args) not in (2, 3):
                return "Usage: activate <plan> <project> [session] [--timeout SEC]"
            record = store.activate(args[0], args[1], args[2] if len(args) == 3 else None, timeout=timeout)
            return f"Activated {record.reference_id} for {record.key} until {_fmt_ts(record.expires_at)}."

        if cmd == "lookup":
            if len(args) not in (1, 2):
                return "Usage: lookup <project> [session]"
            plan = store.lookup(*args)
            return plan if plan is not None else "No active plan."

        if cmd == "clear":
            if len(args) not in (1, 2):
                return "Usage: clear <project> [session]"
            return "Cleared." if store.clear(*args) else "Nothing to clear."

        if cmd == "extend":
            if len(args) not in (1, 2):
                return "Usage: extend <project> [session] [--timeout SEC]"
            secondary = args[1] if len(args) == 2 else None
            if store.extend(args[0], secondary, additional_timeout=timeout):
                return "Extended."
            return "No plan context to extend."

        if cmd == "list":
            return _format_active(store)

        if cmd == "sweep":
            return f"Removed {store.sweep()} expired plan contexts."
    except ContextStoreError as e:
        return f"Error: {e}"

    return None
