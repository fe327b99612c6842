from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A 1-based (line, column) source coordinate.

    Positions order lexically, first by line and then by column.
    """

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


START = Position(line=1, column=1)


def advance_char(pos: Position, ch: str) -> Position:
    if ch == "\n":
        return Position(line=pos.line + 1, column=1)
    return Position(line=pos.line, column=pos.column + 1)


def advance(pos: Position, text: str) -> Position:
    """Move `pos` across `text`, following any embedded newlines."""
    newlines = text.count("\n")
    if newlines == 0:
        return Position(line=pos.line, column=pos.column + len(text))
    tail = text[text.rindex("\n") + 1 :]
    return Position(line=pos.line + newlines, column=1 + len(tail))


@dataclass(frozen=True, slots=True)
class Location:
    """Half-open span [start, end) in a single source."""

    source: str
    start: Position
    end: Position


def span(first: Location, last: Location) -> Location:
    """Join two locations into one running from `first`'s start to `last`'s end."""
    if first.source != last.source:
        raise ValueError(f"cannot span locations from {first.source!r} and {last.source!r}")
    return Location(source=first.source, start=first.start, end=last.end)


@dataclass(frozen=True, slots=True)
class Located(Generic[T]):
    loc: Location
    value: T

    def map(self, f: Callable[[T], U]) -> Located[U]:
        return Located(self.loc, f(self.value))
