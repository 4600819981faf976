"""Discrete commands a shell feeds into an EditorSession."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CommandKind(str, Enum):
    INSERT_CHAR = "insert_char"
    BACKSPACE = "backspace"
    ENTER = "enter"
    ARROW_LEFT = "arrow_left"
    ARROW_RIGHT = "arrow_right"
    ARROW_UP = "arrow_up"
    ARROW_DOWN = "arrow_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    TOGGLE_SEARCH = "toggle_search"
    SEARCH_INPUT = "search_input"
    SEARCH_BACKSPACE = "search_backspace"
    SEARCH_NEXT = "search_next"
    SEARCH_PREVIOUS = "search_previous"
    EXIT_SEARCH = "exit_search"
    TOGGLE_CASE_SENSITIVE = "toggle_case_sensitive"
    JUMP_TO_MATCH = "jump_to_match"


_NEEDS_CHAR = {CommandKind.INSERT_CHAR, CommandKind.SEARCH_INPUT}


@dataclass(frozen=True, slots=True)
class Command:
    kind: CommandKind
    char: Optional[str] = None
    index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind in _NEEDS_CHAR and (self.char is None or len(self.char) != 1):
            raise ValueError(f"{self.kind.value} requires a single character")
        if self.kind is CommandKind.JUMP_TO_MATCH and self.index is None:
            raise ValueError("jump_to_match requires an index")

    @classmethod
    def of(cls, kind: CommandKind | str) -> "Command":
        return cls(CommandKind(kind))

    @classmethod
    def insert_char(cls, char: str) -> "Command":
        return cls(CommandKind.INSERT_CHAR, char=char)

    @classmethod
    def search_input(cls, char: str) -> "Command":
        return cls(CommandKind.SEARCH_INPUT, char=char)

    @classmethod
    def jump_to_match(cls, index: int) -> "Command":
        return cls(CommandKind.JUMP_TO_MATCH, index=index)


__all__ = ["Command", "CommandKind"]
