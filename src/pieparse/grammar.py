from __future__ import annotations

"""
The Pie surface syntax in one place:

- **Keyword policy**: one table per syntactic position, mapping each keyword
  to what it builds. The union of their keys is the reserved-name set.
- **Productions**: `expr`, `top_level` and `program`.

This module is meant to be *human scannable*.
"""

from collections.abc import Mapping
from typing import TypeVar

from . import ast as A
from .errors import Expected
from .lexer import identifier, keyword_table, natural, parens, parens_located, spacing, token
from .parser import (
    Parser,
    apply,
    choice,
    defer,
    describe,
    eof,
    guard,
    literal_char,
    literal_string,
    many_till,
    rep1,
)
from .spans import Located


HEADER = "#lang pie"

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Names
# ---------------------------------------------------------------------------


def _is_free_name(tok: Located[str]) -> bool:
    return tok.value not in RESERVED


var_name: Parser[Located[str]] = describe(
    "name",
    guard(token(identifier), _is_free_name, Expected.description("valid name")),
)

_expr: Parser[A.Expr] = defer(lambda: expr)


def _binder(tok: Located[str]) -> A.Binder:
    return A.Binder(loc=tok.loc, name=tok.value)


def _typed_binder(tok: Located[str], ty: A.Expr) -> A.TypedBinder:
    return A.TypedBinder(loc=tok.loc, name=tok.value, type=ty)


_binders = parens(rep1(var_name.map(_binder)))
_typed_binders = parens(rep1(parens(apply(_typed_binder, var_name, _expr))))


def _args(n: int) -> tuple[Parser[A.Expr], ...]:
    return (_expr,) * n


# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

# Nullary keywords standing alone as expressions.
ATOMS: dict[str, A.ExprNode] = {
    "U": A.Universe(),
    "Nat": A.Nat(),
    "Atom": A.Atom(),
    "Trivial": A.Trivial(),
    "sole": A.Sole(),
    "zero": A.Zero(),
    "nil": A.ListNil(),
    "vecnil": A.VecNil(),
    "Absurd": A.Absurd(),
    "TODO": A.Todo(),
}

_lambda = apply(A.Lambda, _binders, _expr)
_pi = apply(A.Pi, _typed_binders, _expr)
_sigma = apply(A.Sigma, _typed_binders, _expr)
_arrow = apply(A.Arrow, _expr, rep1(_expr))

# Parenthesized forms, dispatched on the keyword after "(".
FORMS: dict[str, Parser[A.ExprNode]] = {
    "add1": apply(A.Add1, *_args(1)),
    "which-Nat": apply(A.WhichNat, *_args(3)),
    "iter-Nat": apply(A.IterNat, *_args(3)),
    "rec-Nat": apply(A.RecNat, *_args(3)),
    "ind-Nat": apply(A.IndNat, *_args(4)),
    "lambda": _lambda,
    "λ": _lambda,
    "Pi": _pi,
    "Π": _pi,
    "->": _arrow,
    "→": _arrow,
    "the": apply(A.The, *_args(2)),
    "Sigma": _sigma,
    "Σ": _sigma,
    "Pair": apply(A.Pair, *_args(2)),
    "cons": apply(A.Cons, *_args(2)),
    "car": apply(A.Car, *_args(1)),
    "cdr": apply(A.Cdr, *_args(1)),
    "=": apply(A.Eq, *_args(3)),
    "same": apply(A.Same, *_args(1)),
    "replace": apply(A.Replace, *_args(3)),
    "trans": apply(A.Trans, *_args(2)),
    "cong": apply(A.Cong, *_args(2)),
    "symm": apply(A.Symm, *_args(1)),
    "ind-=": apply(A.IndEq, *_args(3)),
    "List": apply(A.List, *_args(1)),
    "::": apply(A.ListCons, *_args(2)),
    "rec-List": apply(A.RecList, *_args(3)),
    "ind-List": apply(A.IndList, *_args(4)),
    "Vec": apply(A.Vec, *_args(2)),
    "vec::": apply(A.VecCons, *_args(2)),
    "head": apply(A.VecHead, *_args(1)),
    "tail": apply(A.VecTail, *_args(1)),
    "ind-Vec": apply(A.IndVec, *_args(5)),
    "Either": apply(A.Either, *_args(2)),
    "left": apply(A.EitherLeft, *_args(1)),
    "right": apply(A.EitherRight, *_args(1)),
    "ind-Either": apply(A.IndEither, *_args(4)),
    "ind-Absurd": apply(A.IndAbsurd, *_args(2)),
}

TOP_LEVEL_FORMS: dict[str, Parser[A.TopLevelNode]] = {
    "claim": apply(A.Claim, var_name, _expr),
    "define": apply(A.Define, var_name, _expr),
    "check-same": apply(A.CheckSame, *_args(3)),
}

RESERVED: frozenset[str] = frozenset(ATOMS) | frozenset(FORMS) | frozenset(TOP_LEVEL_FORMS)


def _dispatch(table: Mapping[str, Parser[T]]) -> Parser[T]:
    """Read the keyword token, then run the production it names."""
    return keyword_table(table).bind(lambda kw: kw.value)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

_tick = token(literal_char("'") >> identifier).map(lambda tok: tok.map(A.Tick))
_variable = var_name.map(lambda tok: tok.map(A.Var))
_atom = keyword_table(ATOMS)
_nat_literal = natural.map(lambda tok: tok.map(A.NatLit))
_application = apply(A.App, _expr, rep1(_expr))
_compound = parens_located(_dispatch(FORMS) | _application)

expr: Parser[A.Expr] = describe(
    "expression",
    choice(_tick, _variable, _atom, _nat_literal, _compound),
)


# ---------------------------------------------------------------------------
# Top level
# ---------------------------------------------------------------------------


def _example(e: A.Expr) -> A.TopLevel:
    return Located(e.loc, A.Example(e))


top_level: Parser[A.TopLevel] = parens_located(_dispatch(TOP_LEVEL_FORMS)) | expr.map(_example)

hash_lang: Parser[None] = literal_string(HEADER) >> spacing

program: Parser[tuple[A.TopLevel, ...]] = hash_lang >> many_till(top_level, eof)
