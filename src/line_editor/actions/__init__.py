"""High-level editing verbs reused across modes."""

from .editing import (
    backspace,
    insert_tab,
    move_down,
    move_left,
    move_right,
    move_up,
    newline,
    page_down,
    page_up,
    run_command,
)
from .files import new_document, quit_editor, save_document
from .search import (
    exit_search,
    search_backspace,
    search_next,
    search_previous,
    toggle_case,
    toggle_search,
)

__all__ = [
    "run_command",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "page_up",
    "page_down",
    "backspace",
    "newline",
    "insert_tab",
    "toggle_search",
    "exit_search",
    "search_backspace",
    "search_next",
    "search_previous",
    "toggle_case",
    "save_document",
    "new_document",
    "quit_editor",
]
