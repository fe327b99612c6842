from __future__ import annotations

import string
import unicodedata
from collections.abc import Mapping
from typing import TypeVar

from .errors import GENERIC
from .parser import (
    Parser,
    apply,
    char_matching,
    choice,
    defer,
    describe,
    eof,
    guard,
    literal_char,
    literal_string,
    located,
    rep,
    rep1,
    spanning,
)
from .spans import Located, span


T = TypeVar("T")
V = TypeVar("V")


# ---------------------------------------------------------------------------
# Character classes (R6RS identifiers, minus hex escapes)
# ---------------------------------------------------------------------------

_ALPHABET = frozenset(string.ascii_letters)
_DIGITS = frozenset(string.digits)
_SPECIAL_INITIAL = frozenset("!$%&*/:<=>?^_~")
_SPECIAL_SUBSEQUENT = frozenset("+-.@")

# Only consulted for characters beyond ASCII.
_CONSTITUENT_CATEGORIES = frozenset(
    {
        "Lu",  # uppercase letter
        "Ll",  # lowercase letter
        "Lt",  # titlecase letter
        "Lm",  # modifier letter
        "Lo",  # other letter
        "Mn",  # non-spacing mark
        "Nl",  # letter number
        "No",  # other number
        "Pd",  # dash punctuation
        "Pc",  # connector punctuation
        "Po",  # other punctuation
        "Sc",  # currency symbol
        "Sm",  # math symbol
        "Sk",  # modifier symbol
        "So",  # other symbol
        "Co",  # private use
    }
)
_SUBSEQUENT_CATEGORIES = frozenset({"Nd", "Mc", "Me"})

WHITESPACE = " \r\n\t"


def is_constituent(c: str) -> bool:
    if c in _ALPHABET:
        return True
    return ord(c) > 126 and unicodedata.category(c) in _CONSTITUENT_CATEGORIES


def is_initial(c: str) -> bool:
    return is_constituent(c) or c in _SPECIAL_INITIAL


def is_digit(c: str) -> bool:
    return c in _DIGITS


def is_subsequent(c: str) -> bool:
    return (
        is_initial(c)
        or is_digit(c)
        or unicodedata.category(c) in _SUBSEQUENT_CATEGORIES
        or c in _SPECIAL_SUBSEQUENT
    )


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------


def _join(first: str, rest: tuple[str, ...]) -> str:
    return first + "".join(rest)


_initial = char_matching("identifier-initial character", is_initial)
_subsequent = char_matching("identifier subsequent character", is_subsequent)

_normal_identifier = apply(_join, _initial, rep(_subsequent))
_peculiar_identifier = apply(
    _join,
    choice(literal_string("+"), literal_string("-"), literal_string("...")),
    rep(_subsequent),
)

identifier: Parser[str] = _normal_identifier | _peculiar_identifier

_digits: Parser[str] = describe(
    "natural number literal",
    rep1(char_matching("digit", is_digit)).map("".join),
)


# ---------------------------------------------------------------------------
# Whitespace and comments
# ---------------------------------------------------------------------------

_spacing: Parser[None] = defer(lambda: spacing)


def token(p: Parser[T]) -> Parser[Located[T]]:
    """A located `p` that swallows its own trailing whitespace and comments."""
    return located(p) << _spacing


def parens(p: Parser[T]) -> Parser[T]:
    return token(literal_char("(")) >> p << token(literal_char(")"))


def _wrap(open_: Located[str], value: T, close: Located[str]) -> Located[T]:
    return Located(span(open_.loc, close.loc), value)


def parens_located(p: Parser[T]) -> Parser[Located[T]]:
    """Like `parens`, located from the opening through the closing parenthesis."""
    return apply(_wrap, token(literal_char("(")), p, token(literal_char(")")))


def _ignore(_: object) -> None:
    return None


line_comment: Parser[None] = describe(
    "line comment",
    (literal_char(";") >> spanning(lambda c: c != "\n") >> (literal_char("\n").map(_ignore) | eof)),
)

_datum: Parser[None] = defer(lambda: datum)

datum: Parser[None] = token(parens(rep(_datum)).map(_ignore) | identifier.map(_ignore) | _digits.map(_ignore)).map(
    _ignore
)

datum_comment: Parser[None] = (token(literal_string("#;")) >> datum).map(_ignore)

spacing: Parser[None] = rep(
    choice(
        *(literal_char(c).map(_ignore) for c in WHITESPACE),
        line_comment,
        datum_comment,
    )
).map(_ignore)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def keyword_table(table: Mapping[str, V]) -> Parser[Located[V]]:
    """Match an identifier token that is a key of `table`; yield its entry."""
    return guard(token(identifier), lambda tok: tok.value in table, GENERIC).map(
        lambda tok: tok.map(table.__getitem__)
    )


def keyword(k: str) -> Parser[Located[str]]:
    return keyword_table({k: k})


natural: Parser[Located[int]] = token(_digits).map(lambda tok: tok.map(int))
