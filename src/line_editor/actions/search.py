"""Actions driving the incremental search."""

from __future__ import annotations

from line_editor.commands import CommandKind
from line_editor.keymaps.resolver import ResolutionMatch
from line_editor.modes.base_mode import ModeContext, ModeResult
from line_editor.session import EditorMode

from .editing import run_command


def _with_query_event(context: ModeContext, result: ModeResult) -> ModeResult:
    search = context.session.search
    context.bus.emit(
        "search.update",
        {
            "query": search.query,
            "matches": search.match_count,
            "current": search.current_index if search.matches else None,
        },
    )
    return result


def toggle_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    result = run_command(context, CommandKind.TOGGLE_SEARCH, status="search_toggle")
    searching = context.session.mode is EditorMode.SEARCH
    result.message = "enter_search" if searching else "exit_search"
    return result


def exit_search(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    result = run_command(context, CommandKind.EXIT_SEARCH, status="search_exit")
    result.message = "exit_search"
    return result


def search_backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    result = run_command(context, CommandKind.SEARCH_BACKSPACE, status="search_edit")
    return _with_query_event(context, result)


def search_next(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    result = run_command(context, CommandKind.SEARCH_NEXT, status="search_next")
    return _with_query_event(context, result)


def search_previous(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    result = run_command(context, CommandKind.SEARCH_PREVIOUS, status="search_previous")
    return _with_query_event(context, result)


def toggle_case(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    result = run_command(
        context, CommandKind.TOGGLE_CASE_SENSITIVE, status="search_case"
    )
    result.message = (
        "case_sensitive" if context.session.search.case_sensitive else "case_insensitive"
    )
    return _with_query_event(context, result)


__all__ = [
    "toggle_search",
    "exit_search",
    "search_backspace",
    "search_next",
    "search_previous",
    "toggle_case",
]
