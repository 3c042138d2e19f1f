# tests/repl/test_commands.py

from __future__ import annotations

from plancontext.repl.commands import handle_command


def test_activate_and_lookup(store):
    reply = handle_command(store, "activate plan-7 proj-A --timeout 30")
    assert reply.startswith("Activated plan-7 for proj-A")
    assert store.get_record("proj-A").expires_at == store.now() + 30

    assert handle_command(store, "lookup proj-A") == "plan-7"
    assert handle_command(store, "lookup proj-A sess-1") == "No active plan."


def test_activate_with_session_and_equals_timeout(store):
    handle_command(store, "activate plan-1 proj-A sess-X --timeout=5")
    assert store.lookup("proj-A", "sess-X") == "plan-1"
    assert store.lookup("proj-A") is None


def test_clear_and_extend(store, clock):
    assert handle_command(store, "clear proj-C") == "Nothing to clear."
    assert handle_command(store, "extend proj-C") == "No plan context to extend."

    store.activate("plan-1", "proj-C", timeout=1)
    assert handle_command(store, "extend proj-C --timeout 60") == "Extended."
    assert store.get_record("proj-C").expires_at == clock.now + 60
    assert handle_command(store, "clear proj-C") == "Cleared."


def test_list_renders_table(store):
    assert handle_command(store, "list") == "No active plan contexts."

    store.activate("plan-1", "proj-A", "sess-1")
    table = handle_command(store, "list")
    assert "proj-A:sess-1" in table
    assert "plan-1" in table
    assert "600s" in table


def test_sweep_reports_count(store, clock):
    store.activate("plan-1", "proj-A", timeout=1)
    clock.advance(2)
    assert handle_command(store, "sweep") == "Removed 1 expired plan contexts."


def test_usage_and_errors_are_returned_not_raised(store):
    assert handle_command(store, "activate plan-1").startswith("Usage:")
    assert handle_command(store, "lookup").startswith("Usage:")
    assert handle_command(store, "activate plan-1 proj-A --timeout soon") == "Invalid timeout: 'soon'"
    assert handle_command(store, "activate plan-1 proj-A --timeout 0").startswith("Error:")


def test_unknown_and_empty_lines(store):
    assert handle_command(store, "frobnicate") is None
    assert handle_command(store, "   ") == ""
    assert "activate <plan>" in handle_command(store, "help")


def test_bare_timeout_flag_is_a_usage_error(store):
    reply = handle_command(store, "activate plan-1 proj-A --timeout")
    assert reply.startswith("Usage:")
    assert len(store) == 0

    assert handle_command(store, "extend proj-A --timeout=").startswith("Usage:")


def test_timeout_on_commands_without_one_is_rejected(store):
    store.activate("plan-1", "proj-A")

    assert handle_command(store, "lookup proj-A --timeout 5").startswith("Usage:")
    assert handle_command(store, "clear proj-A --timeout 5").startswith("Usage:")
    assert store.lookup("proj-A") == "plan-1"
