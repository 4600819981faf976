from __future__ import annotations

from line_editor.buffer import Buffer, Viewport, move_down, move_left, move_right, move_up
from line_editor.buffer.viewport import max_scroll


def make_buffer(count: int) -> Buffer:
    return Buffer.from_lines([f"line {index}" for index in range(count)])


def test_move_left_wraps_to_previous_line_end() -> None:
    buffer = Buffer.from_lines(["abc", "de"])
    buffer.move_cursor(1, 0)

    assert move_left(buffer) == (0, 3)
    buffer.move_cursor(0, 0)
    assert move_left(buffer) == (0, 0)


def test_move_right_wraps_to_next_line_start() -> None:
    buffer = Buffer.from_lines(["abc", "de"])
    buffer.move_cursor(0, 3)

    assert move_right(buffer) == (1, 0)
    buffer.move_cursor(1, 2)
    assert move_right(buffer) == (1, 2)


def test_vertical_moves_clamp_column() -> None:
    buffer = Buffer.from_lines(["abcdef", "ab", "abcd"])
    buffer.move_cursor(0, 5)

    assert move_down(buffer) == (1, 2)
    assert move_down(buffer) == (2, 2)
    assert move_down(buffer) == (2, 2)
    assert move_up(buffer) == (1, 2)
    buffer.move_cursor(0, 4)
    assert move_up(buffer) == (0, 4)


def test_recompute_follows_cursor() -> None:
    buffer = make_buffer(100)
    viewport = Viewport()

    buffer.move_cursor(50, 0)
    assert viewport.recompute(buffer, 10) == 41

    buffer.move_cursor(3, 0)
    assert viewport.recompute(buffer, 10) == 3


def test_recompute_stays_within_bounds() -> None:
    for count in (1, 5, 12, 40):
        buffer = make_buffer(count)
        for height in (0, 1, 3, 10, 50):
            viewport = Viewport(scroll_offset=count + 7)
            for row in range(count):
                buffer.move_cursor(row, 0)
                offset = viewport.recompute(buffer, height)
                assert offset >= 0
                assert offset <= max(0, count - max(1, height))
                first, end = viewport.visible_range(buffer, height)
                assert first <= row < end


def test_page_down_and_up_move_window_and_cursor() -> None:
    buffer = make_buffer(30)
    viewport = Viewport()
    buffer.move_cursor(0, 3)

    assert viewport.page_down(buffer, 10) == (10, 3)
    assert viewport.scroll_offset == 10

    assert viewport.page_up(buffer, 10) == (0, 3)
    assert viewport.scroll_offset == 0


def test_page_down_clamps_near_end() -> None:
    buffer = make_buffer(15)
    viewport = Viewport()

    viewport.page_down(buffer, 10)
    assert viewport.scroll_offset == 5
    assert buffer.state.row == 10

    viewport.page_down(buffer, 10)
    assert viewport.scroll_offset == 5
    assert buffer.state.row == 14


def test_page_up_at_top_is_clamped() -> None:
    buffer = make_buffer(5)
    viewport = Viewport()
    buffer.move_cursor(2, 1)

    assert viewport.page_up(buffer, 10) == (0, 1)
    assert viewport.scroll_offset == 0


def test_visible_range_short_buffer() -> None:
    buffer = make_buffer(3)
    viewport = Viewport()

    assert viewport.visible_range(buffer, 10) == (0, 3)
    assert max_scroll(3, 10) == 0
    assert max_scroll(30, 10) == 20
