"""Substring search over the flattened buffer text.

Matches are half-open ``(start, end)`` spans in code points over the text
produced by joining the buffer lines with ``"\\n"``. A search always rebuilds
the full match list; nothing is shifted incrementally when the buffer
changes, so callers re-run ``SearchState.search`` after every edit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from line_editor.runtime import telemetry


@dataclass(frozen=True, slots=True)
class Match:
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


class InvalidMatchIndex(IndexError):
    """Raised when ``jump_to`` targets an index outside the match set."""

    def __init__(self, index: int, count: int) -> None:
        super().__init__(f"Match index {index} out of range for {count} matches")
        self.index = index
        self.count = count


def fold_case(text: str) -> str:
    """Lower-case ``text`` one code point at a time.

    Characters whose lower-case form is longer than one code point (``"İ"``)
    are kept as-is so every offset in the folded string still points at the
    same character in the unfolded text.
    """

    folded = []
    for char in text:
        lowered = char.lower()
        folded.append(lowered if len(lowered) == 1 else char)
    return "".join(folded)


def find_matches(text: str, query: str, case_sensitive: bool = False) -> List[Match]:
    if not query:
        return []
    haystack = text if case_sensitive else fold_case(text)
    needle = query if case_sensitive else fold_case(query)

    matches: List[Match] = []
    start = 0
    while True:
        position = haystack.find(needle, start)
        if position < 0:
            break
        end = position + len(needle)
        matches.append(Match(position, end))
        start = end
    return matches


@dataclass
class SearchState:
    """Query, case flag and the match list built from one buffer version."""

    query: str = ""
    case_sensitive: bool = False
    matches: List[Match] = field(default_factory=list)
    current_index: int = 0
    version: Optional[int] = None

    @property
    def match_count(self) -> int:
        return len(self.matches)

    def search(self, text: str, *, version: Optional[int] = None) -> List[Match]:
        with telemetry.span(
            "search::run",
            component="search",
            metadata={
                "query_length": len(self.query),
                "case_sensitive": self.case_sensitive,
            },
        ) as handle:
            self.matches = find_matches(text, self.query, self.case_sensitive)
            self.current_index = 0
            self.version = version
            handle.add_metadata("matches", len(self.matches))
        return self.matches

    def clear(self) -> None:
        self.query = ""
        self.matches = []
        self.current_index = 0
        self.version = None

    def is_stale(self, version: int) -> bool:
        return self.version is not None and self.version != version

    def current(self) -> Optional[Match]:
        if self.current_index < len(self.matches):
            return self.matches[self.current_index]
        return None

    def next(self) -> Optional[Match]:
        if self.matches:
            self.current_index = (self.current_index + 1) % len(self.matches)
        return self.current()

    def previous(self) -> Optional[Match]:
        if self.matches:
            self.current_index = (self.current_index - 1) % len(self.matches)
        return self.current()

    def jump_to(self, index: int) -> Match:
        if not 0 <= index < len(self.matches):
            raise InvalidMatchIndex(index, len(self.matches))
        self.current_index = index
        return self.matches[index]


__all__ = [
    "Match",
    "SearchState",
    "InvalidMatchIndex",
    "find_matches",
    "fold_case",
]
