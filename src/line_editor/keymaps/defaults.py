"""Built-in keymaps that seed each mode with sensible defaults."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import ActionRef, Binding
from .registry import KeymapRegistry


def default_actions() -> tuple[ActionRef, ...]:
    """Return the built-in actions.

    Handlers live in ``line_editor.actions``, which itself imports this
    package, so they are resolved on first use.
    """

    from line_editor.actions import editing as editing_actions
    from line_editor.actions import files as file_actions
    from line_editor.actions import search as search_actions

    return (
        ActionRef("edit.move_left", editing_actions.move_left, "Cursor left"),
        ActionRef("edit.move_right", editing_actions.move_right, "Cursor right"),
        ActionRef("edit.move_up", editing_actions.move_up, "Cursor up"),
        ActionRef("edit.move_down", editing_actions.move_down, "Cursor down"),
        ActionRef("edit.page_up", editing_actions.page_up, "Scroll one page up"),
        ActionRef("edit.page_down", editing_actions.page_down, "Scroll one page down"),
        ActionRef("edit.backspace", editing_actions.backspace, "Delete before cursor"),
        ActionRef("edit.newline", editing_actions.newline, "Split the current line"),
        ActionRef("edit.insert_tab", editing_actions.insert_tab, "Insert a tab"),
        ActionRef("search.toggle", search_actions.toggle_search, "Open or close search"),
        ActionRef("search.exit", search_actions.exit_search, "Leave search"),
        ActionRef(
            "search.backspace", search_actions.search_backspace, "Delete from the query"
        ),
        ActionRef("search.next", search_actions.search_next, "Next match"),
        ActionRef("search.previous", search_actions.search_previous, "Previous match"),
        ActionRef("search.toggle_case", search_actions.toggle_case, "Toggle match case"),
        ActionRef("file.save", file_actions.save_document, "Save the document"),
        ActionRef("file.new", file_actions.new_document, "Start a new document"),
        ActionRef("app.quit", file_actions.quit_editor, "Quit"),
    )


DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding.of("normal.left", "normal", "LEFT", "edit.move_left"),
    Binding.of("normal.right", "normal", "RIGHT", "edit.move_right"),
    Binding.of("normal.up", "normal", "UP", "edit.move_up"),
    Binding.of("normal.down", "normal", "DOWN", "edit.move_down"),
    Binding.of("normal.page_up", "normal", "PAGEUP", "edit.page_up"),
    Binding.of("normal.page_down", "normal", "PAGEDOWN", "edit.page_down"),
    Binding.of("normal.backspace", "normal", "BACKSPACE", "edit.backspace"),
    Binding.of("normal.enter", "normal", "ENTER", "edit.newline"),
    Binding.of("normal.tab", "normal", "TAB", "edit.insert_tab"),
    Binding.of("normal.search", "normal", "ctrl+f", "search.toggle"),
    Binding.of("normal.save", "normal", "ctrl+s", "file.save"),
    Binding.of("normal.new", "normal", "ctrl+n", "file.new"),
    Binding.of("normal.quit", "normal", "ctrl+q", "app.quit"),
    Binding.of("search.escape", "search", "ESC", "search.exit"),
    Binding.of("search.enter", "search", "ENTER", "search.exit"),
    Binding.of("search.close", "search", "ctrl+f", "search.toggle"),
    Binding.of("search.backspace", "search", "BACKSPACE", "search.backspace"),
    Binding.of("search.next", "search", "F3", "search.next"),
    Binding.of("search.previous", "search", "shift+F3", "search.previous"),
    Binding.of("search.case", "search", "ctrl+t", "search.toggle_case"),
    Binding.of("search.left", "search", "LEFT", "edit.move_left"),
    Binding.of("search.right", "search", "RIGHT", "edit.move_right"),
    Binding.of("search.up", "search", "UP", "edit.move_up"),
    Binding.of("search.down", "search", "DOWN", "edit.move_down"),
    Binding.of("search.page_up", "search", "PAGEUP", "edit.page_up"),
    Binding.of("search.page_down", "search", "PAGEDOWN", "edit.page_down"),
    Binding.of("search.save", "search", "ctrl+s", "file.save"),
    Binding.of("search.quit", "search", "ctrl+q", "app.quit"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode."""

    include = set(include_bindings) if include_bindings else None
    exclude = set(exclude_bindings or ())

    for action in default_actions():
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if include is not None and binding.id not in include:
            continue
        if binding.id in exclude:
            continue
        registry.register_binding(binding, replace=replace)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["load_default_keymaps", "default_actions", "DEFAULT_BINDINGS"]
