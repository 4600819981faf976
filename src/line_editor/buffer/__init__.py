"""Line buffer, cursor state and viewport arithmetic."""

from .buffer import (
    Buffer,
    BufferDelta,
    BufferView,
    Transaction,
    cursor_from_offset,
    offset_for_cursor,
)
from .document import LineDocument, split_text
from .state import BufferState, Cursor
from .sync import BufferMirror, BufferValidationError
from .validation import clamp_cursor, ensure_cursor
from .viewport import Viewport, move_down, move_left, move_right, move_up

__all__ = [
    "LineDocument",
    "split_text",
    "BufferState",
    "Cursor",
    "Buffer",
    "BufferDelta",
    "BufferView",
    "Transaction",
    "BufferMirror",
    "BufferValidationError",
    "Viewport",
    "clamp_cursor",
    "cursor_from_offset",
    "ensure_cursor",
    "offset_for_cursor",
    "move_left",
    "move_right",
    "move_up",
    "move_down",
]
