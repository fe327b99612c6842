from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from .spans import START, Position, advance


@dataclass(frozen=True, slots=True)
class GenericError:
    """Uninformative placeholder. Never meant to be shown to users."""


@dataclass(frozen=True, slots=True)
class Expected:
    """One of these literal characters or named productions was required."""

    chars: frozenset[str] = frozenset()
    descriptions: frozenset[str] = frozenset()

    @classmethod
    def char(cls, c: str) -> Expected:
        return cls(chars=frozenset((c,)))

    @classmethod
    def description(cls, desc: str) -> Expected:
        return cls(descriptions=frozenset((desc,)))


@dataclass(frozen=True, slots=True)
class EndOfInput:
    """More input was needed, or input remained where none should."""


ParseErr = GenericError | Expected | EndOfInput

GENERIC = GenericError()
END_OF_INPUT = EndOfInput()


def merge(e1: ParseErr, e2: ParseErr) -> ParseErr:
    """Combine the contents of two failures reported at the same position.

    GenericError is the identity. EndOfInput is absorbed by the other
    operand. Expected values union their sets.
    """
    if isinstance(e1, GenericError):
        return e2
    if isinstance(e2, GenericError):
        return e1
    if isinstance(e1, EndOfInput):
        return e2
    if isinstance(e2, EndOfInput):
        return e1
    return Expected(
        chars=e1.chars | e2.chars,
        descriptions=e1.descriptions | e2.descriptions,
    )


@dataclass(frozen=True, slots=True)
class PositionedError:
    pos: Position
    error: ParseErr

    @property
    def line(self) -> int:
        return self.pos.line

    @property
    def column(self) -> int:
        return self.pos.column


def furthest(e1: PositionedError, e2: PositionedError) -> PositionedError:
    """Keep the failure that reached deeper; merge contents on a tie."""
    if e1.pos > e2.pos:
        return e1
    if e2.pos > e1.pos:
        return e2
    return PositionedError(e1.pos, merge(e1.error, e2.error))


def describe_error(err: ParseErr) -> str:
    if isinstance(err, Expected):
        items = [repr(c) for c in sorted(err.chars)] + sorted(err.descriptions)
        if not items:
            return "parse error"
        return "expected one of: " + ", ".join(items)
    if isinstance(err, EndOfInput):
        return "unexpected end of input"
    if isinstance(err, GenericError):
        return "parse error"
    assert_never(err)


@dataclass(slots=True)
class ParseError(Exception):
    """A failed parse of `file`.

    `source` is the parsed text, when known. It tells leftover input apart from
    running out of input, which share the `EndOfInput` payload. `detail`
    replaces the derived message for failures outside the grammar.
    """

    file: str
    error: PositionedError
    source: str | None = None
    detail: str | None = None

    @property
    def message(self) -> str:
        if self.detail is not None:
            return self.detail
        if (
            isinstance(self.error.error, EndOfInput)
            and self.source is not None
            and self.error.pos < advance(START, self.source)
        ):
            return "expected end of input"
        return describe_error(self.error.error)

    def __str__(self) -> str:
        return f"{self.file}:{self.error.line}:{self.error.column}: {self.message}"
