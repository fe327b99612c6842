from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from pieparse.errors import (
    END_OF_INPUT,
    GENERIC,
    EndOfInput,
    Expected,
    GenericError,
    ParseError,
    PositionedError,
    describe_error,
    furthest,
    merge,
)
from pieparse.spans import Position


expecteds = st.builds(
    Expected,
    chars=st.frozensets(st.characters(), max_size=4),
    descriptions=st.frozensets(st.text(max_size=8), max_size=4),
)
errors = st.one_of(st.just(GENERIC), st.just(END_OF_INPUT), expecteds)


@given(errors)
def test_generic_is_identity(e) -> None:
    assert merge(GENERIC, e) == e
    assert merge(e, GENERIC) == e


@given(expecteds)
def test_end_of_input_is_absorbed(e: Expected) -> None:
    assert merge(END_OF_INPUT, e) == e
    assert merge(e, END_OF_INPUT) == e


@given(expecteds, expecteds)
def test_expected_merges_by_union(e1: Expected, e2: Expected) -> None:
    out = merge(e1, e2)
    assert out == Expected(e1.chars | e2.chars, e1.descriptions | e2.descriptions)


def test_merge_removes_duplicates() -> None:
    out = merge(Expected.char("("), Expected(frozenset("("), frozenset({"name"})))
    assert out == Expected(frozenset("("), frozenset({"name"}))


def test_furthest_prefers_deeper_error_outright() -> None:
    shallow = PositionedError(Position(1, 2), Expected.char("("))
    deep = PositionedError(Position(1, 5), END_OF_INPUT)
    assert furthest(shallow, deep) == deep
    assert furthest(deep, shallow) == deep


def test_furthest_merges_at_same_position() -> None:
    a = PositionedError(Position(2, 1), Expected.char("("))
    b = PositionedError(Position(2, 1), Expected.description("name"))
    assert furthest(a, b) == PositionedError(
        Position(2, 1), Expected(frozenset("("), frozenset({"name"}))
    )


def test_describe_error() -> None:
    assert describe_error(EndOfInput()) == "unexpected end of input"
    assert describe_error(GenericError()) == "parse error"
    msg = describe_error(Expected(frozenset(")("), frozenset({"name", "expression"})))
    assert msg == "expected one of: '(', ')', expression, name"


def test_parse_error_str() -> None:
    err = ParseError(file="x.pie", error=PositionedError(Position(3, 9), Expected.char(")")))
    assert str(err) == "x.pie:3:9: expected one of: ')'"
    assert err.message == "expected one of: ')'"


def test_parse_error_tells_leftover_input_from_running_out() -> None:
    leftover = ParseError(file="x.pie", error=PositionedError(Position(1, 3), END_OF_INPUT), source="x )")
    assert leftover.message == "expected end of input"
    at_end = ParseError(file="x.pie", error=PositionedError(Position(2, 1), END_OF_INPUT), source="(x\n")
    assert at_end.message == "unexpected end of input"
    unknown = ParseError(file="x.pie", error=PositionedError(Position(1, 3), END_OF_INPUT))
    assert unknown.message == "unexpected end of input"


def test_parse_error_detail_overrides_message() -> None:
    err = ParseError(file="x.pie", error=PositionedError(Position(4, 2), GENERIC), detail="too deep")
    assert str(err) == "x.pie:4:2: too deep"
