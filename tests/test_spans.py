from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pieparse.spans import Located, Location, Position, advance, advance_char, span


positions = st.builds(Position, line=st.integers(1, 10_000), column=st.integers(1, 10_000))


@given(positions, st.text().filter(lambda s: "\n" not in s))
def test_advance_without_newline_moves_column(pos: Position, text: str) -> None:
    out = advance(pos, text)
    assert out.line == pos.line
    assert out.column == pos.column + len(text)


@given(positions, st.lists(st.text().filter(lambda s: "\n" not in s), min_size=2))
def test_advance_with_newlines(pos: Position, lines: list[str]) -> None:
    text = "\n".join(lines)
    out = advance(pos, text)
    assert out.line == pos.line + len(lines) - 1
    assert out.column == 1 + len(lines[-1])


@given(positions, st.text(alphabet="ab\n", max_size=30))
def test_advance_agrees_with_char_by_char(pos: Position, text: str) -> None:
    stepped = pos
    for ch in text:
        stepped = advance_char(stepped, ch)
    assert advance(pos, text) == stepped


def test_advance_char() -> None:
    assert advance_char(Position(3, 7), "x") == Position(3, 8)
    assert advance_char(Position(3, 7), "\n") == Position(4, 1)


def test_positions_order_by_line_then_column() -> None:
    assert Position(1, 80) < Position(2, 1)
    assert Position(2, 3) < Position(2, 4)
    assert max(Position(2, 1), Position(1, 99)) == Position(2, 1)


def test_span_takes_start_of_first_and_end_of_last() -> None:
    a = Location("f.pie", Position(1, 1), Position(1, 2))
    b = Location("f.pie", Position(3, 4), Position(3, 5))
    assert span(a, b) == Location("f.pie", Position(1, 1), Position(3, 5))


def test_span_rejects_mixed_sources() -> None:
    a = Location("a.pie", Position(1, 1), Position(1, 2))
    b = Location("b.pie", Position(1, 3), Position(1, 4))
    with pytest.raises(ValueError):
        span(a, b)


def test_located_map_keeps_location() -> None:
    loc = Location("f.pie", Position(2, 2), Position(2, 5))
    out = Located(loc, "abc").map(str.upper)
    assert out == Located(loc, "ABC")
