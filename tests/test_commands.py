# tests/test_commands.py

from __future__ import annotations

from taskfold.cli.commands import CommandRegistry, registry
from taskfold.connectors.console_connector import handle_line
from taskfold.core.state import AppState


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}
    notes: list[str] = []

    def h2(state, args):
        called["h2"] += 1
        return "h2:" + ",".join(args)

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x y") == "h2:x,y"
    assert reg.handle(state, "/B", emit=notes.append) == "h3"
    assert called == {"h2": 1, "h3": 1}
    assert notes == ["note"]


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_single_letter_aliases_are_case_sensitive(state: AppState) -> None:
    registry.handle(state, "/group add Home")
    registry.handle(state, "/a Buy milk")
    registry.handle(state, "/A 2%")

    forest = state.store.require_selected().forest
    assert [(n.id, n.name, n.parent) for n in forest] == [(0, "Buy milk", None), (1, "2%", 0)]


def test_edit_done_fold_and_navigation_flow(state: AppState) -> None:
    for line in ("/group add Home", "/add root", "/sub a", "/sub b", "/add next"):
        registry.handle(state, line)

    assert registry.handle(state, "/e Root") == "Task renamed."
    assert registry.handle(state, "/fold") == "Folded."
    assert registry.handle(state, "/j") == "Task 3."
    assert registry.handle(state, "/k") == "Task 0."
    assert registry.handle(state, "/select 2") == "Task 2 is hidden inside a folded task."
    assert registry.handle(state, "/c") == "Marked done."

    forest = state.store.require_selected().forest
    assert forest.find(0).name == "Root"
    assert all(forest.find(i).done for i in (0, 1, 2))

    assert registry.handle(state, "/u") == "Undone."
    assert forest is not state.store.require_selected().forest
    assert not state.store.require_selected().forest.find(0).done
    assert registry.handle(state, "/r") == "Redone."


def test_fold_leaf_message(state: AppState) -> None:
    registry.handle(state, "/group add Home")
    registry.handle(state, "/add leaf")
    assert registry.handle(state, "/f") == "Only tasks with subtasks can be folded."


def test_commands_without_tasks_are_harmless(state: AppState) -> None:
    registry.handle(state, "/group add Home")
    assert registry.handle(state, "/d") == "No task selected."
    assert registry.handle(state, "/sub x") == "No task to add a subtask to."
    assert registry.handle(state, "/j") == "Task 0."
    assert registry.handle(state, "/undo") == "Undone."
    assert registry.handle(state, "/undo") == "Nothing to undo."


def test_group_subcommands(state: AppState) -> None:
    assert registry.handle(state, "/group add Home") == "Group 0 added: Home"
    assert registry.handle(state, "/group add Side projects") == "Group 1 added: Side projects"
    assert registry.handle(state, "/group select 1") == "Group 1 selected."
    assert registry.handle(state, "/group rename Hobbies") == "Group renamed to Hobbies."
    assert registry.handle(state, "/group prev") == "Group 0 selected."

    notes: list[str] = []
    assert registry.handle(state, "/group delete", emit=notes.append) == "Group 'Home' deleted."
    assert notes and "Home" in notes[0]
    assert [g.name for g in state.store.groups] == ["Hobbies"]
    assert "Usage" in (registry.handle(state, "/group") or "")


def test_handle_line_reports_engine_errors(state: AppState) -> None:
    assert handle_line(state, "/add orphan").startswith("No group selected")
    registry.handle(state, "/group add Home")
    assert handle_line(state, "/group select 9") == "Group 9 not found."
    assert handle_line(state, "/select 4") == "Task 4 not found."
    assert handle_line(state, "plain text").startswith("Commands start with '/'")


def test_help_lists_aliases(state: AppState) -> None:
    text = registry.handle(state, "/?") or ""
    assert "/add (/a)" in text
    assert "/sub (/A)" in text
