"""High-level buffer façade combining the line document and cursor state."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, Optional, Sequence

from line_editor.runtime import telemetry

from .document import LineDocument
from .state import BufferState, Cursor
from .sync import BufferMirror
from .validation import clamp_cursor, ensure_cursor


@dataclass(slots=True)
class BufferView:
    version: int
    lines: tuple[str, ...]
    cursor: Cursor
    dirty: bool

    @property
    def text(self) -> str:
        return _flatten_lines(self.lines)


@dataclass(slots=True)
class BufferDelta:
    version: int
    cursor: Cursor
    label: str
    changed: bool = True


class Buffer:
    """Line buffer with a cursor, mutated only through character-level edits."""

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[LineDocument] = None,
        state: Optional[BufferState] = None,
    ) -> None:
        self.name = name
        self.document = document or LineDocument()
        self.state = state or BufferState()

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=LineDocument.from_text(text))

    @classmethod
    def from_lines(cls, lines: Iterable[str], *, name: str = "default") -> "Buffer":
        return cls(name=name, document=LineDocument.from_lines(lines))

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def dirty(self) -> bool:
        return self.document.dirty

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def character_count(self) -> int:
        return len(self.to_text())

    @property
    def word_count(self) -> int:
        return sum(len(line.split()) for line in self.document.snapshot())

    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def to_text(self) -> str:
        return self.document.to_text()

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            lines=tuple(self.document.snapshot()),
            cursor=self.state.cursor,
            dirty=self.document.dirty,
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.to_text(),
            cursor=self.state.cursor,
            version=self.document.version,
            attributes=dict(attributes or {}),
        )

    def move_cursor(self, row: int, col: int) -> Cursor:
        """Place the cursor, clamping both coordinates into the buffer."""

        cursor = clamp_cursor(self.document, row, col)
        self.state.set_cursor(*cursor)
        return cursor

    def insert_char(self, char: str, *, cursor: Optional[Cursor] = None) -> BufferDelta:
        if len(char) != 1:
            raise ValueError("insert_char expects exactly one character")
        if char in "\r\n":
            raise ValueError("line terminators must go through split_line")
        row, col = self._resolve(cursor)
        with Transaction(self, "insert_char"):
            line = self.document.get_line(row)
            self.document = self.document.update_lines(
                row, row + 1, [line[:col] + char + line[col:]]
            )
            self.state.set_cursor(row, col + 1)
        return self._delta("insert_char")

    def delete_char(self, *, cursor: Optional[Cursor] = None) -> BufferDelta:
        """Backspace: remove the character before the cursor or join lines."""

        row, col = self._resolve(cursor)
        if row == 0 and col == 0:
            self.state.set_cursor(0, 0)
            return self._delta("delete_char", changed=False)

        with Transaction(self, "delete_char"):
            line = self.document.get_line(row)
            if col > 0:
                self.document = self.document.update_lines(
                    row, row + 1, [line[: col - 1] + line[col:]]
                )
                self.state.set_cursor(row, col - 1)
            else:
                previous = self.document.get_line(row - 1)
                self.document = self.document.update_lines(
                    row - 1, row + 1, [previous + line]
                )
                self.state.set_cursor(row - 1, len(previous))
        return self._delta("delete_char")

    def split_line(self, *, cursor: Optional[Cursor] = None) -> BufferDelta:
        row, col = self._resolve(cursor)
        with Transaction(self, "split_line"):
            line = self.document.get_line(row)
            self.document = self.document.update_lines(
                row, row + 1, [line[:col], line[col:]]
            )
            self.state.set_cursor(row + 1, 0)
        return self._delta("split_line")

    def replace_lines(self, lines: Iterable[str]) -> BufferDelta:
        """Swap the whole content, e.g. after a file load."""

        with Transaction(self, "replace_lines"):
            self.document = self.document.replace(lines=lines, dirty=False)
            self.state.set_cursor(0, 0)
        return self._delta("replace_lines")

    def mark_clean(self) -> None:
        self.document.dirty = False

    def _resolve(self, cursor: Optional[Cursor]) -> Cursor:
        if cursor is None:
            return ensure_cursor(self.document, self.state.cursor)
        return ensure_cursor(self.document, cursor)

    def _delta(self, label: str, *, changed: bool = True) -> BufferDelta:
        return BufferDelta(
            version=self.document.version,
            cursor=self.state.cursor,
            label=label,
            changed=changed,
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps a single edit in a telemetry span."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={
                "buffer": self.buffer.name,
                "cursor": self.buffer.state.cursor,
            },
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


def _flatten_lines(lines) -> str:
    return "\n".join(lines)


def offset_for_cursor(lines: Sequence[str], cursor: Cursor) -> int:
    row, col = cursor
    offset = 0
    for i in range(row):
        offset += len(lines[i]) + 1  # newline
    return offset + col


def cursor_from_offset(lines: Sequence[str], offset: int) -> Cursor:
    running = 0
    for row, line in enumerate(lines):
        line_len = len(line)
        if offset <= running + line_len:
            return (row, max(0, offset - running))
        running += line_len + 1
    return (len(lines) - 1, len(lines[-1]))
