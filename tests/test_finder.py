from __future__ import annotations

import pytest

from line_editor.search import InvalidMatchIndex, Match, SearchState, find_matches
from line_editor.search.finder import fold_case


def make_state(text: str, query: str, *, case_sensitive: bool = False) -> SearchState:
    state = SearchState(query=query, case_sensitive=case_sensitive)
    state.search(text, version=0)
    return state


@pytest.mark.parametrize("case_sensitive", [True, False])
def test_empty_query_has_no_matches(case_sensitive: bool) -> None:
    assert find_matches("anything", "", case_sensitive) == []


def test_scan_is_non_overlapping() -> None:
    assert find_matches("aaa", "aa", case_sensitive=True) == [Match(0, 2)]
    assert find_matches("aaaa", "aa", case_sensitive=True) == [Match(0, 2), Match(2, 4)]


def test_case_insensitive_finds_every_spelling() -> None:
    matches = find_matches("Hello hello HELLO", "hello", case_sensitive=False)

    assert [match.start for match in matches] == [0, 6, 12]
    assert all(len(match) == 5 for match in matches)


def test_case_sensitive_only_exact() -> None:
    assert find_matches("Hello hello HELLO", "hello", case_sensitive=True) == [
        Match(6, 11)
    ]


def test_offsets_are_code_points() -> None:
    matches = find_matches("né é\né", "é", case_sensitive=True)

    assert [match.start for match in matches] == [1, 3, 5]


def test_fold_case_keeps_offsets_aligned() -> None:
    text = "İstanbul ist"

    assert len(fold_case(text)) == len(text)
    assert find_matches(text, "IST") == [Match(9, 12)]


def test_matches_span_line_breaks() -> None:
    assert find_matches("abc\ndef", "c\nd", case_sensitive=True) == [Match(2, 5)]


def test_next_cycles_back_to_start() -> None:
    state = make_state("foo boo zoo", "o")
    start = state.current_index

    for _ in range(state.match_count):
        state.next()

    assert state.current_index == start
    assert state.current() == Match(1, 2)


def test_previous_wraps_to_last() -> None:
    state = make_state("ab ab ab", "ab")

    assert state.previous() == Match(6, 8)
    assert state.current_index == 2


def test_navigation_on_empty_set_returns_none() -> None:
    state = make_state("abc", "zzz")

    assert state.next() is None
    assert state.previous() is None
    assert state.current() is None


def test_jump_to_out_of_range_raises() -> None:
    state = make_state("ab ab", "ab")

    assert state.jump_to(1) == Match(3, 5)
    with pytest.raises(InvalidMatchIndex) as excinfo:
        state.jump_to(2)

    assert isinstance(excinfo.value, IndexError)
    assert excinfo.value.index == 2
    assert excinfo.value.count == 2
    assert state.current_index == 1


def test_search_resets_index_and_tracks_version() -> None:
    state = make_state("a a a", "a")
    state.next()

    state.search("a a a", version=4)

    assert state.current_index == 0
    assert state.is_stale(4) is False
    assert state.is_stale(5) is True


def test_clear_drops_query_and_matches() -> None:
    state = make_state("a a", "a", case_sensitive=True)

    state.clear()

    assert state.query == ""
    assert state.matches == []
    assert state.case_sensitive is True
