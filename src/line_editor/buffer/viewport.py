"""Cursor motions and the scroll window over a Buffer."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import Buffer
from .state import Cursor


def move_left(buffer: Buffer) -> Cursor:
    row, col = buffer.state.cursor
    if col > 0:
        return buffer.move_cursor(row, col - 1)
    if row == 0:
        return buffer.move_cursor(0, 0)
    return buffer.move_cursor(row - 1, len(buffer.document.get_line(row - 1)))


def move_right(buffer: Buffer) -> Cursor:
    row, col = buffer.state.cursor
    line = buffer.document.get_line(row)
    if col < len(line):
        return buffer.move_cursor(row, col + 1)
    if row >= buffer.line_count - 1:
        return buffer.move_cursor(row, len(line))
    return buffer.move_cursor(row + 1, 0)


def move_up(buffer: Buffer) -> Cursor:
    row, col = buffer.state.cursor
    if row == 0:
        return buffer.move_cursor(0, col)
    return buffer.move_cursor(row - 1, col)


def move_down(buffer: Buffer) -> Cursor:
    row, col = buffer.state.cursor
    if row >= buffer.line_count - 1:
        return buffer.move_cursor(row, col)
    return buffer.move_cursor(row + 1, col)


def _height(visible_height: int) -> int:
    return max(1, visible_height)


def max_scroll(line_count: int, visible_height: int) -> int:
    return max(0, line_count - _height(visible_height))


@dataclass(slots=True)
class Viewport:
    """Tracks the first visible line.

    ``scroll_offset`` always stays inside ``[0, max(0, line_count - height)]``
    once ``recompute`` has run for the current render pass.
    """

    scroll_offset: int = 0

    def recompute(self, buffer: Buffer, visible_height: int) -> int:
        height = _height(visible_height)
        row = buffer.state.row
        if row >= self.scroll_offset + height:
            self.scroll_offset = row - height + 1
        elif row < self.scroll_offset:
            self.scroll_offset = row
        self.scroll_offset = max(
            0, min(self.scroll_offset, max_scroll(buffer.line_count, height))
        )
        return self.scroll_offset

    def page_up(self, buffer: Buffer, visible_height: int) -> Cursor:
        return self._page(buffer, -_height(visible_height), visible_height)

    def page_down(self, buffer: Buffer, visible_height: int) -> Cursor:
        return self._page(buffer, _height(visible_height), visible_height)

    def visible_range(self, buffer: Buffer, visible_height: int) -> tuple[int, int]:
        """Half-open ``(first, end)`` line window for the current offset."""

        first = min(self.scroll_offset, max(0, buffer.line_count - 1))
        end = min(first + _height(visible_height), buffer.line_count)
        return first, end

    def reset(self) -> None:
        self.scroll_offset = 0

    def _page(self, buffer: Buffer, delta: int, visible_height: int) -> Cursor:
        limit = max_scroll(buffer.line_count, visible_height)
        self.scroll_offset = max(0, min(self.scroll_offset + delta, limit))
        row, col = buffer.state.cursor
        return buffer.move_cursor(row + delta, col)


__all__ = [
    "Viewport",
    "max_scroll",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
]
