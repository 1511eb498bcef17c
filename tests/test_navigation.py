from __future__ import annotations

from modal_edit.buffer import BufferState, LineStore
from modal_edit.navigation import (
    Viewport,
    center_on_cursor,
    follow_cursor,
    motions,
    screen_position,
    visible_rows,
)


def make_store(*lines: str) -> LineStore:
    return LineStore(line.encode("ascii") for line in lines)


def test_left_right_wrap_across_lines() -> None:
    store = make_store("abc", "de")

    assert motions.move_right(store, (0, 3)) == (1, 0)
    assert motions.move_left(store, (1, 0)) == (0, 3)
    assert motions.move_left(store, (0, 0)) == (0, 0)
    assert motions.move_right(store, (1, 2)) == (1, 2)


def test_up_down_clamp_column() -> None:
    store = make_store("a long line", "ab", "another long")

    assert motions.move_down(store, (0, 9)) == (1, 2)
    assert motions.move_up(store, (2, 9)) == (1, 2)
    assert motions.move_up(store, (0, 4)) == (0, 4)
    assert motions.move_down(store, (2, 1)) == (2, 1)


def test_motions_clamp_stale_cursor() -> None:
    store = make_store("abc")

    assert motions.move_left(store, (7, 99)) == (0, 2)


def test_line_start_is_soft_home() -> None:
    store = make_store("    code")

    assert motions.line_start(store, (0, 6)) == (0, 4)
    assert motions.line_start(store, (0, 4)) == (0, 0)
    assert motions.line_end(store, (0, 0)) == (0, 8)


def test_word_forward_and_backward() -> None:
    store = make_store("foo bar", "foo.bar")

    assert motions.word_forward(store, (0, 0)) == (0, 4)
    assert motions.word_forward(store, (0, 4)) == (0, 7)
    assert motions.word_forward(store, (1, 0)) == (1, 3)
    assert motions.word_backward(store, (0, 4)) == (0, 0)
    assert motions.word_backward(store, (1, 7)) == (1, 4)
    assert motions.word_backward(store, (1, 0)) == (1, 0)


def test_page_motions_move_height_minus_one() -> None:
    store = make_store(*[f"line {n}" for n in range(30)])

    assert motions.page_down(store, (0, 0), 10) == (9, 0)
    assert motions.page_down(store, (25, 0), 10) == (29, 0)
    assert motions.page_up(store, (20, 0), 10) == (11, 0)
    assert motions.page_up(store, (3, 0), 10) == (0, 0)
    assert motions.page_down(store, (0, 0), 1) == (1, 0)


def test_file_ends_and_goto() -> None:
    store = make_store("one", "two", "three")

    assert motions.file_start(store, (2, 3)) == (0, 0)
    assert motions.file_end(store, (0, 0)) == (2, 5)
    assert motions.goto_line(store, (0, 2), 2) == (1, 0)
    assert motions.goto_line(store, (0, 0), 99) == (2, 0)
    assert motions.goto_line(store, (1, 0), 0) == (0, 0)
    assert motions.goto_column(store, (2, 0), 99) == (2, 5)


def test_matching_bracket_nested() -> None:
    store = make_store("f(a[b]) (x")

    assert motions.matching_bracket(store, (0, 1)) == (0, 6)
    assert motions.matching_bracket(store, (0, 6)) == (0, 1)
    assert motions.matching_bracket(store, (0, 3)) == (0, 5)
    # Unbalanced and non-bracket positions stay put.
    assert motions.matching_bracket(store, (0, 8)) == (0, 8)
    assert motions.matching_bracket(store, (0, 0)) == (0, 0)


def test_follow_cursor_vertical() -> None:
    viewport = Viewport(height=10, width=80)
    state = BufferState(cursor=(25, 0))

    follow_cursor(state, viewport)
    assert state.scroll_row == 16

    state.set_cursor(3, 0)
    follow_cursor(state, viewport)
    assert state.scroll_row == 3


def test_follow_cursor_horizontal_margin() -> None:
    viewport = Viewport(height=10, width=40, margin=10)
    state = BufferState(cursor=(0, 35))

    follow_cursor(state, viewport)
    assert state.scroll_col == 6

    state.set_cursor(0, 2)
    follow_cursor(state, viewport)
    assert state.scroll_col == 2


def test_follow_cursor_viewport_narrower_than_margin() -> None:
    viewport = Viewport(height=10, width=6, margin=10)
    state = BufferState()

    for col in (0, 0, 3, 5, 11, 11, 4, 0):
        state.set_cursor(0, col)
        follow_cursor(state, viewport)
        assert state.scroll_col <= col < state.scroll_col + viewport.width

    assert state.scroll_col == 0


def test_center_on_cursor_and_visible_rows() -> None:
    store = make_store(*[str(n) for n in range(100)])
    viewport = Viewport(height=10, width=80)
    state = BufferState(cursor=(50, 0))

    center_on_cursor(state, store, viewport)

    assert state.scroll_row == 45
    assert visible_rows(state, store, viewport) == range(45, 55)


def test_center_on_cursor_near_end_keeps_window_full() -> None:
    store = make_store(*[str(n) for n in range(20)])
    viewport = Viewport(height=10, width=80)
    state = BufferState(cursor=(19, 0))

    center_on_cursor(state, store, viewport)

    assert state.scroll_row == 10
    assert visible_rows(state, store, viewport) == range(10, 20)


def test_screen_position_adds_gutter() -> None:
    state = BufferState(cursor=(12, 7), scroll_row=10, scroll_col=2)

    assert screen_position(state) == (2, 5)
    assert screen_position(state, gutter=6) == (2, 11)


def test_viewport_page_size() -> None:
    assert Viewport(height=10, width=80).page_size == 9
    assert Viewport(height=1, width=80).page_size == 1
