"""Map flattened match offsets back onto buffer lines for rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence

from .finder import Match


@dataclass(frozen=True, slots=True)
class HighlightSpan:
    line: int
    start: int
    end: int
    current: bool = False


def line_starts(line_lengths: Sequence[int]) -> List[int]:
    starts = []
    offset = 0
    for length in line_lengths:
        starts.append(offset)
        offset += length + 1  # newline
    return starts


def map_highlights(
    matches: Iterable[Match],
    line_lengths: Sequence[int],
    current_index: Optional[int] = None,
) -> List[HighlightSpan]:
    """Return per-line spans in match order.

    A match that covers a line break is cut into one span per line it
    touches; the break itself is never part of a span.
    """

    starts = line_starts(line_lengths)
    spans: List[HighlightSpan] = []
    line = 0
    for index, match in enumerate(matches):
        is_current = index == current_index
        if starts and starts[line] > match.start:
            line = 0
        while line + 1 < len(starts) and starts[line + 1] <= match.start:
            line += 1
        row = line
        while row < len(starts) and starts[row] < max(match.end, match.start + 1):
            line_end = starts[row] + line_lengths[row]
            start_col = max(match.start, starts[row]) - starts[row]
            end_col = min(match.end, line_end) - starts[row]
            if end_col > start_col:
                spans.append(HighlightSpan(row, start_col, end_col, is_current))
            row += 1
    return spans


def spans_by_line(spans: Iterable[HighlightSpan]) -> Dict[int, List[HighlightSpan]]:
    grouped: Dict[int, List[HighlightSpan]] = {}
    for span in spans:
        grouped.setdefault(span.line, []).append(span)
    return grouped


__all__ = ["HighlightSpan", "map_highlights", "spans_by_line", "line_starts"]
