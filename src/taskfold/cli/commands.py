# src/taskfold/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..connectors.tree_render import render_group_lines, render_view
from ..core.state import AppState
from ..tasks import task_api

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Slash-command registry used by the console connector (/add, /done, ...).

    Command names are case-insensitive; single-letter aliases are matched
    exactly first so that /a (add task) and /A (add subtask) stay distinct.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self._aliases: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        self._aliases[key] = list(aliases)
        for alias in aliases:
            self._handlers[alias] = handler

    def _lookup(self, name: str) -> CommandHandler | None:
        return self._handlers.get(name) or self._handlers.get(name.lower())

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0]
        args = parts[1:]

        handler = self._lookup(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            aliases = self._aliases.get(name) or []
            alias_str = f" (/{', /'.join(aliases)})" if aliases else ""
            lines.append(f"  /{name}{alias_str} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _text(args: list[str]) -> str:
    return " ".join(args).strip()


def _int_arg(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.store
    forest = store.selected_forest
    total, completed = forest.count_and_completed() if forest is not None else (0, 0)
    data_path = getattr(state.settings, "data_path", "?")
    return (
        "Status:\n"
        f"  Groups: {len(store.groups)}\n"
        f"  Selected: group {store.selected_group}, task {store.selected_task}\n"
        f"  Progress: {completed}/{total} done\n"
        f"  Hidden by folds: {len(store.fold_index.hidden_union())}\n"
        f"  History: {state.history.undo_depth} undo / {state.history.redo_depth} redo\n"
        f"  Data file: {data_path}"
    )


def cmd_ls(state: AppState, args: list[str]) -> str:
    return render_view(state.store, state.settings)


def cmd_groups(state: AppState, args: list[str]) -> str:
    lines = render_group_lines(state.store)
    return "\n".join(lines) if lines else "No groups yet."


def cmd_group(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /group add <name>     -> create a group
    /group rename <name>  -> rename the selected group
    /group delete         -> delete the selected group and all of its tasks
    /group select <n>     -> switch to group n
    /group next | prev    -> move the group cursor
    """
    usage = (
        "Usage:\n"
        "  /group add <name>\n"
        "  /group rename <name>\n"
        "  /group delete\n"
        "  /group select <n>\n"
        "  /group next | /group prev"
    )
    if not args:
        return usage

    sub = args[0].lower()
    rest = args[1:]

    if sub == "add":
        name = _text(rest)
        if not name:
            return "Usage: /group add <name>"
        index = task_api.add_group(state, name)
        return f"Group {index} added: {name}"

    if sub in ("rename", "edit"):
        name = _text(rest)
        if not name:
            return "Usage: /group rename <name>"
        task_api.rename_group(state, name)
        return f"Group renamed to {name}."

    if sub in ("delete", "del", "rm"):
        entry = state.store.require_selected()
        if emit:
            with contextlib.suppress(Exception):
                emit(f"Deleting group {entry.name!r} with {len(entry.forest)} task(s)...")
        name = task_api.delete_group(state)
        return f"Group {name!r} deleted."

    if sub in ("select", "sel"):
        index = _int_arg(rest)
        if index is None:
            return "Usage: /group select <n>"
        task_api.select_group(state, index)
        return f"Group {index} selected."

    if sub in ("next", "down"):
        return f"Group {task_api.move_group_down(state)} selected."

    if sub in ("prev", "up"):
        return f"Group {task_api.move_group_up(state)} selected."

    return "Unknown /group subcommand.\n" + usage


def cmd_add(state: AppState, args: list[str]) -> str:
    name = _text(args)
    if not name:
        return "Usage: /add <task name>"
    task_id = task_api.add_task(state, name)
    return f"Task {task_id} added."


def cmd_sub(state: AppState, args: list[str]) -> str:
    name = _text(args)
    if not name:
        return "Usage: /sub <subtask name>"
    store = state.store
    if not store.selected_forest:
        return "No task to add a subtask to."
    task_id = task_api.add_subtask(state, name)
    return f"Subtask {task_id} added under task {store.selected_task}."


def cmd_edit(state: AppState, args: list[str]) -> str:
    name = _text(args)
    if not name:
        return "Usage: /edit <new name>"
    if not state.store.selected_forest:
        return "No task selected."
    task_api.edit_task(state, name)
    return "Task renamed."


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not state.store.selected_forest:
        return "No task selected."
    removed = task_api.remove_task(state)
    return f"Removed {removed} task(s)."


def cmd_done(state: AppState, args: list[str]) -> str:
    if not state.store.selected_forest:
        return "No task selected."
    done = task_api.toggle_done(state)
    return "Marked done." if done else "Marked not done."


def cmd_fold(state: AppState, args: list[str]) -> str:
    if not state.store.selected_forest:
        return "No task selected."
    if not task_api.toggle_fold(state):
        return "Only tasks with subtasks can be folded."
    node = state.store.require_selected().forest.find(state.store.selected_task)
    return "Folded." if node.folded else "Unfolded."


def cmd_down(state: AppState, args: list[str]) -> str:
    return f"Task {task_api.move_down(state)}."


def cmd_up(state: AppState, args: list[str]) -> str:
    return f"Task {task_api.move_up(state)}."


def cmd_select(state: AppState, args: list[str]) -> str:
    task_id = _int_arg(args)
    if task_id is None:
        return "Usage: /select <task id>"
    if state.store.fold_index.is_hidden(task_id):
        return f"Task {task_id} is hidden inside a folded task."
    task_api.select_task(state, task_id)
    return f"Task {task_id}."


def cmd_undo(state: AppState, args: list[str]) -> str:
    return "Undone." if task_api.undo(state) else "Nothing to undo."


def cmd_redo(state: AppState, args: list[str]) -> str:
    return "Redone." if task_api.redo(state) else "Nothing to redo."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show counts, cursor and history depth.")
registry.register("ls", cmd_ls, help_text="Show groups and the selected task tree.", aliases=["l"])
registry.register("groups", cmd_groups, help_text="List groups.", aliases=["g"])
registry.register(
    "group", cmd_group, help_text="Groups: /group add|rename|delete|select|next|prev."
)
registry.register("add", cmd_add, help_text="Add a task: /add <name>.", aliases=["a"])
registry.register(
    "sub", cmd_sub, help_text="Add a subtask under the selected task.", aliases=["A"]
)
registry.register("edit", cmd_edit, help_text="Rename the selected task.", aliases=["e"])
registry.register(
    "del", cmd_delete, help_text="Delete the selected task and its subtasks.", aliases=["d"]
)
registry.register("done", cmd_done, help_text="Complete/uncomplete the selected task.", aliases=["c"])
registry.register("fold", cmd_fold, help_text="Fold/unfold the selected task.", aliases=["f"])
registry.register("down", cmd_down, help_text="Move the cursor down.", aliases=["j"])
registry.register("up", cmd_up, help_text="Move the cursor up.", aliases=["k"])
registry.register("select", cmd_select, help_text="Jump to a task id: /select <id>.", aliases=["s"])
registry.register("undo", cmd_undo, help_text="Undo the last edit.", aliases=["u"])
registry.register("redo", cmd_redo, help_text="Redo the last undone edit.", aliases=["r"])
