"""Core document data structures for line_editor buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence


def split_text(text: str) -> List[str]:
    """Split on line feeds only, dropping the carriage return of CRLF endings.

    Form feeds, ``U+2028`` and other separators stay inside their line so that
    joining with a line feed restores the text. A final line feed does not add
    an empty line.
    """

    pieces = text.split("\n")
    last = pieces.pop()
    lines = [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]
    if last or not lines:
        lines.append(last)
    return lines


@dataclass(slots=True)
class LineDocument:
    """Immutable-ish text storage built on a simple list-of-lines model.

    Every edit produces a new document with a bumped ``version``; callers that
    cache derived data (search matches, rendered spans) compare versions to
    notice that their copy is stale. The document never holds zero lines.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0
    dirty: bool = False

    def __post_init__(self) -> None:
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "LineDocument":
        return cls.from_lines(split_text(text))

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "LineDocument":
        return cls(_lines=list(lines), version=0, dirty=False)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def replace(
        self, *, lines: Iterable[str], dirty: bool | None = None
    ) -> "LineDocument":
        """Return a new document with the provided lines and bumped version."""

        updated = LineDocument(_lines=list(lines), version=self.version + 1)
        updated.dirty = bool(dirty if dirty is not None else self.dirty)
        return updated

    def update_lines(
        self, start: int, end: int, new_lines: Iterable[str]
    ) -> "LineDocument":
        """Return a document with ``[start:end]`` replaced by ``new_lines``."""

        lines = list(self._lines)
        lines[start:end] = list(new_lines)
        return LineDocument(_lines=lines, version=self.version + 1, dirty=True)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_lengths(self) -> tuple[int, ...]:
        return tuple(len(line) for line in self._lines)

    def to_text(self) -> str:
        return "\n".join(self._lines)
