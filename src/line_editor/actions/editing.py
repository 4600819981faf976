"""Navigation and edit actions bound in normal mode."""

from __future__ import annotations

from line_editor.commands import Command, CommandKind
from line_editor.keymaps.resolver import ResolutionMatch
from line_editor.modes.base_mode import ModeContext, ModeResult


def run_command(context: ModeContext, kind: CommandKind, *, status: str) -> ModeResult:
    """Execute ``kind`` on the session and report any mode change."""

    session = context.session
    before = session.mode
    outcome = session.execute(Command.of(kind))
    if outcome.changed:
        context.bus.emit("buffer.changed", session.buffer.version)
    return ModeResult(
        consumed=True,
        switch_to=outcome.mode.value if outcome.mode is not before else None,
        status=status,
    )


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.ARROW_LEFT, status="move")


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.ARROW_RIGHT, status="move")


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.ARROW_UP, status="move")


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.ARROW_DOWN, status="move")


def page_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.PAGE_UP, status="page")


def page_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.PAGE_DOWN, status="page")


def backspace(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.BACKSPACE, status="backspace")


def newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return run_command(context, CommandKind.ENTER, status="newline")


def insert_tab(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    outcome = context.session.execute(Command.insert_char("\t"))
    if outcome.changed:
        context.bus.emit("buffer.changed", context.session.buffer.version)
    return ModeResult(consumed=True, status="insert_char")


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
]
