"""Editor session owning the buffer, viewport and search state.

One session object is mutated by one input handler at a time. It accepts
``Command`` values through ``execute`` and answers the render queries a
front-end needs before each draw (``visible_lines``, ``cursor_screen_position``
and ``status_summary``).

Two behaviours are fixed here:

* While a search query is active, every buffer mutation re-runs the search
  so the highlighted spans never describe an older document version.
* Rebuilding a non-empty match set, and any next/previous/jump, moves the
  cursor to the start of the current match.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from line_editor.buffer import Buffer, Cursor, Viewport, cursor_from_offset
from line_editor.buffer import viewport as motion
from line_editor.commands import Command, CommandKind
from line_editor.runtime import EditorSettings, telemetry
from line_editor.search import HighlightSpan, Match, SearchState, map_highlights
from line_editor.search.highlight import spans_by_line

DEFAULT_VISIBLE_HEIGHT = 24


class EditorMode(str, Enum):
    NORMAL = "normal"
    SEARCH = "search"


@dataclass(frozen=True, slots=True)
class RenderLine:
    index: int
    text: str
    spans: Tuple[HighlightSpan, ...] = ()


@dataclass(frozen=True, slots=True)
class StatusSummary:
    """Display-ready status values; line and column are 1-based."""

    filename: Optional[str]
    current_line: int
    total_lines: int
    current_column: int
    scroll_offset: int
    match_count: int
    current_match_ordinal: Optional[int]
    mode: EditorMode
    query: str
    case_sensitive: bool
    dirty: bool
    characters: int
    words: int

    def format(self) -> str:
        name = self.filename or "[No Name]"
        if self.dirty:
            name = f"{name} (modified)"
        parts = [
            name,
            f"Line: {self.current_line}/{self.total_lines}, Col: {self.current_column}",
            f"Scroll: {self.scroll_offset + 1}",
            f"Chars: {self.characters} Words: {self.words}",
        ]
        if self.mode is EditorMode.SEARCH:
            case = "Aa" if self.case_sensitive else "aa"
            parts.append(f"/{self.query} [{case}]")
        if self.current_match_ordinal is not None:
            parts.append(f"Match {self.current_match_ordinal}/{self.match_count}")
        elif self.query:
            parts.append("No matches")
        return " | ".join(parts)


@dataclass(frozen=True, slots=True)
class CommandOutcome:
    command: Command
    mode: EditorMode
    cursor: Cursor
    changed: bool = False
    match: Optional[Match] = None


class EditorSession:
    def __init__(
        self,
        *,
        buffer: Optional[Buffer] = None,
        settings: Optional[EditorSettings] = None,
        filename: Optional[str] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.buffer = buffer or Buffer()
        self.viewport = Viewport()
        self.search = SearchState(case_sensitive=self.settings.case_sensitive)
        self.filename = filename
        self.visible_height = DEFAULT_VISIBLE_HEIGHT
        self._mode = EditorMode.NORMAL
        self.logger = telemetry.get_logger("line_editor.session")
        self._handlers: Dict[CommandKind, Callable[[Command], object]] = {
            CommandKind.INSERT_CHAR: lambda cmd: self.insert_char(cmd.char or ""),
            CommandKind.BACKSPACE: lambda cmd: self.backspace(),
            CommandKind.ENTER: lambda cmd: self.newline(),
            CommandKind.ARROW_LEFT: lambda cmd: motion.move_left(self.buffer),
            CommandKind.ARROW_RIGHT: lambda cmd: motion.move_right(self.buffer),
            CommandKind.ARROW_UP: lambda cmd: motion.move_up(self.buffer),
            CommandKind.ARROW_DOWN: lambda cmd: motion.move_down(self.buffer),
            CommandKind.PAGE_UP: lambda cmd: self.page_up(),
            CommandKind.PAGE_DOWN: lambda cmd: self.page_down(),
            CommandKind.TOGGLE_SEARCH: lambda cmd: self.toggle_search(),
            CommandKind.SEARCH_INPUT: lambda cmd: self.search_input(cmd.char or ""),
            CommandKind.SEARCH_BACKSPACE: lambda cmd: self.search_backspace(),
            CommandKind.SEARCH_NEXT: lambda cmd: self.search_next(),
            CommandKind.SEARCH_PREVIOUS: lambda cmd: self.search_previous(),
            CommandKind.EXIT_SEARCH: lambda cmd: self.exit_search(),
            CommandKind.TOGGLE_CASE_SENSITIVE: lambda cmd: self.toggle_case_sensitive(),
            CommandKind.JUMP_TO_MATCH: lambda cmd: self.jump_to_match(cmd.index or 0),
        }

    @property
    def mode(self) -> EditorMode:
        return self._mode

    @property
    def cursor(self) -> Cursor:
        return self.buffer.state.cursor

    @property
    def dirty(self) -> bool:
        return self.buffer.dirty

    # -- command intake -------------------------------------------------

    def execute(self, command: Command) -> CommandOutcome:
        command = self._route(command)
        version = self.buffer.version
        with telemetry.span(
            f"session::{command.kind.value}",
            component="session",
            metadata={"mode": self._mode.value},
        ):
            result = self._handlers[command.kind](command)
        return CommandOutcome(
            command=command,
            mode=self._mode,
            cursor=self.cursor,
            changed=self.buffer.version != version,
            match=result if isinstance(result, Match) else None,
        )

    def _route(self, command: Command) -> Command:
        """Redirect editing keys to the query while search is active."""

        if command.kind is CommandKind.INSERT_CHAR and command.char in ("\n", "\r"):
            command = Command.of(CommandKind.ENTER)
        if self._mode is not EditorMode.SEARCH:
            return command
        if command.kind is CommandKind.INSERT_CHAR:
            return Command.search_input(command.char or "")
        if command.kind is CommandKind.BACKSPACE:
            return Command.of(CommandKind.SEARCH_BACKSPACE)
        if command.kind is CommandKind.ENTER:
            return Command.of(CommandKind.EXIT_SEARCH)
        return command

    # -- editing ----------------------------------------------------------

    def insert_char(self, char: str) -> bool:
        delta = self.buffer.insert_char(char)
        self._after_edit()
        return delta.changed

    def backspace(self) -> bool:
        delta = self.buffer.delete_char()
        if delta.changed:
            self._after_edit()
        return delta.changed

    def newline(self) -> bool:
        delta = self.buffer.split_line()
        self._after_edit()
        return delta.changed

    def page_up(self, visible_height: Optional[int] = None) -> Cursor:
        return self.viewport.page_up(self.buffer, visible_height or self.visible_height)

    def page_down(self, visible_height: Optional[int] = None) -> Cursor:
        return self.viewport.page_down(
            self.buffer, visible_height or self.visible_height
        )

    def _after_edit(self) -> None:
        if self.search.query:
            self.search.search(self.buffer.to_text(), version=self.buffer.version)

    # -- search -----------------------------------------------------------

    def toggle_search(self) -> Optional[Match]:
        if self._mode is EditorMode.SEARCH:
            return self.exit_search()
        return self.enter_search()

    def enter_search(self) -> Optional[Match]:
        self.search.clear()
        self._switch(EditorMode.SEARCH)
        return None

    def exit_search(self) -> Optional[Match]:
        self.search.clear()
        self._switch(EditorMode.NORMAL)
        return None

    def search_input(self, char: str) -> Optional[Match]:
        self.search.query += char
        return self._rebuild_matches()

    def search_backspace(self) -> Optional[Match]:
        if not self.search.query:
            return None
        self.search.query = self.search.query[:-1]
        return self._rebuild_matches()

    def set_query(self, query: str) -> Optional[Match]:
        self.search.query = query
        return self._rebuild_matches()

    def toggle_case_sensitive(self) -> Optional[Match]:
        self.search.case_sensitive = not self.search.case_sensitive
        return self._rebuild_matches()

    def search_next(self) -> Optional[Match]:
        return self._follow(self.search.next())

    def search_previous(self) -> Optional[Match]:
        return self._follow(self.search.previous())

    def jump_to_match(self, index: int) -> Match:
        match = self.search.jump_to(index)
        self._follow(match)
        return match

    def _rebuild_matches(self) -> Optional[Match]:
        self.search.search(self.buffer.to_text(), version=self.buffer.version)
        return self._follow(self.search.current())

    def _follow(self, match: Optional[Match]) -> Optional[Match]:
        if match is not None:
            row, col = cursor_from_offset(self.buffer.lines(), match.start)
            self.buffer.move_cursor(row, col)
        return match

    def _switch(self, mode: EditorMode) -> None:
        if mode is self._mode:
            return
        self._mode = mode
        telemetry.record_event("session.mode", data={"mode": mode.value})

    # -- document lifecycle ---------------------------------------------

    def replace_buffer(self, lines: Iterable[str]) -> None:
        self.buffer.replace_lines(lines)
        self.viewport.reset()
        self.search.clear()
        self._switch(EditorMode.NORMAL)

    def load(self, lines: Iterable[str], *, filename: Optional[str] = None) -> None:
        self.replace_buffer(lines)
        self.filename = filename
        self.logger.info(
            f"loaded {filename or '[No Name]'} ({self.buffer.line_count} lines)"
        )

    def new_document(self, *, force: bool = False) -> bool:
        """Start an empty document; refuses to drop unsaved edits unless forced."""

        if self.dirty and not force:
            self.logger.warning("new document refused: unsaved changes")
            return False
        self.load([""], filename=None)
        return True

    def to_text(self) -> str:
        return self.buffer.to_text()

    def save_target(self) -> str:
        return self.filename or self.settings.default_filename

    def mark_saved(self, filename: str) -> None:
        self.filename = filename
        self.buffer.mark_clean()

    # -- render queries -------------------------------------------------

    def recompute_scroll(self, visible_height: Optional[int] = None) -> int:
        if visible_height is not None:
            self.visible_height = max(1, visible_height)
        return self.viewport.recompute(self.buffer, self.visible_height)

    def visible_lines(self, visible_height: Optional[int] = None) -> List[RenderLine]:
        self.recompute_scroll(visible_height)
        first, end = self.viewport.visible_range(self.buffer, self.visible_height)
        lines = self.buffer.lines()
        grouped = spans_by_line(self.highlight_spans())
        return [
            RenderLine(index=row, text=lines[row], spans=tuple(grouped.get(row, ())))
            for row in range(first, end)
        ]

    def highlight_spans(self) -> List[HighlightSpan]:
        if not self.search.matches or self.search.is_stale(self.buffer.version):
            return []
        return map_highlights(
            self.search.matches,
            self.buffer.document.line_lengths(),
            self.search.current_index,
        )

    def cursor_screen_position(self, visible_height: Optional[int] = None) -> Tuple[int, int]:
        """``(x, y)`` of the cursor relative to the top of the viewport."""

        offset = self.recompute_scroll(visible_height)
        row, col = self.cursor
        return col, row - offset

    def status_summary(self, visible_height: Optional[int] = None) -> StatusSummary:
        offset = self.recompute_scroll(visible_height)
        row, col = self.cursor
        current = self.search.current()
        ordinal = None if current is None else self.search.current_index + 1
        return StatusSummary(
            filename=self.filename,
            current_line=row + 1,
            total_lines=self.buffer.line_count,
            current_column=col + 1,
            scroll_offset=offset,
            match_count=self.search.match_count,
            current_match_ordinal=ordinal,
            mode=self._mode,
            query=self.search.query,
            case_sensitive=self.search.case_sensitive,
            dirty=self.dirty,
            characters=self.buffer.character_count,
            words=self.buffer.word_count,
        )


__all__ = [
    "EditorSession",
    "EditorMode",
    "RenderLine",
    "StatusSummary",
    "CommandOutcome",
]
