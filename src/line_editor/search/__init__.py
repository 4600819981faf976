"""Substring search and highlight mapping."""

from .finder import InvalidMatchIndex, Match, SearchState, find_matches, fold_case
from .highlight import HighlightSpan, map_highlights, spans_by_line

__all__ = [
    "Match",
    "SearchState",
    "InvalidMatchIndex",
    "find_matches",
    "fold_case",
    "HighlightSpan",
    "map_highlights",
    "spans_by_line",
]
