from __future__ import annotations

from dataclasses import dataclass

from .spans import Located, Location


@dataclass(frozen=True, slots=True)
class ExprNode:
    """Base of all expression forms. Located via `Expr`."""


Expr = Located[ExprNode]


@dataclass(frozen=True, slots=True)
class Binder:
    """A bound name, kept with its own location for scope diagnostics."""

    loc: Location
    name: str


@dataclass(frozen=True, slots=True)
class TypedBinder:
    loc: Location
    name: str
    type: Expr


# ---------------------------------------------------------------------------
# Names and literals
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Var(ExprNode):
    name: str


@dataclass(frozen=True, slots=True)
class Tick(ExprNode):
    """A quoted atom, e.g. 'apple."""

    name: str


@dataclass(frozen=True, slots=True)
class NatLit(ExprNode):
    value: int


# ---------------------------------------------------------------------------
# Nullary keywords
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Universe(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class Nat(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class Zero(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class Atom(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class Trivial(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class Sole(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class ListNil(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class VecNil(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class Absurd(ExprNode):
    pass


@dataclass(frozen=True, slots=True)
class Todo(ExprNode):
    """An explicit hole to be filled in later."""


# ---------------------------------------------------------------------------
# Naturals
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Add1(ExprNode):
    arg: Expr


@dataclass(frozen=True, slots=True)
class WhichNat(ExprNode):
    target: Expr
    base: Expr
    step: Expr


@dataclass(frozen=True, slots=True)
class IterNat(ExprNode):
    target: Expr
    base: Expr
    step: Expr


@dataclass(frozen=True, slots=True)
class RecNat(ExprNode):
    target: Expr
    base: Expr
    step: Expr


@dataclass(frozen=True, slots=True)
class IndNat(ExprNode):
    target: Expr
    motive: Expr
    base: Expr
    step: Expr


# ---------------------------------------------------------------------------
# Functions, pairs and ascription
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Lambda(ExprNode):
    binders: tuple[Binder, ...]
    body: Expr


@dataclass(frozen=True, slots=True)
class Pi(ExprNode):
    binders: tuple[TypedBinder, ...]
    body: Expr


@dataclass(frozen=True, slots=True)
class Arrow(ExprNode):
    """(-> A B ... R): `arg` is A, `rest` ends with the result type R."""

    arg: Expr
    rest: tuple[Expr, ...]

    @property
    def arg_types(self) -> tuple[Expr, ...]:
        return (self.arg, *self.rest[:-1])

    @property
    def result_type(self) -> Expr:
        return self.rest[-1]


@dataclass(frozen=True, slots=True)
class App(ExprNode):
    fun: Expr
    args: tuple[Expr, ...]


@dataclass(frozen=True, slots=True)
class The(ExprNode):
    type: Expr
    term: Expr


@dataclass(frozen=True, slots=True)
class Sigma(ExprNode):
    binders: tuple[TypedBinder, ...]
    body: Expr


@dataclass(frozen=True, slots=True)
class Pair(ExprNode):
    car_type: Expr
    cdr_type: Expr


@dataclass(frozen=True, slots=True)
class Cons(ExprNode):
    car: Expr
    cdr: Expr


@dataclass(frozen=True, slots=True)
class Car(ExprNode):
    pair: Expr


@dataclass(frozen=True, slots=True)
class Cdr(ExprNode):
    pair: Expr


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Eq(ExprNode):
    type: Expr
    from_: Expr
    to: Expr


@dataclass(frozen=True, slots=True)
class Same(ExprNode):
    value: Expr


@dataclass(frozen=True, slots=True)
class Replace(ExprNode):
    target: Expr
    motive: Expr
    base: Expr


@dataclass(frozen=True, slots=True)
class Trans(ExprNode):
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Cong(ExprNode):
    target: Expr
    fun: Expr


@dataclass(frozen=True, slots=True)
class Symm(ExprNode):
    target: Expr


@dataclass(frozen=True, slots=True)
class IndEq(ExprNode):
    target: Expr
    motive: Expr
    base: Expr


# ---------------------------------------------------------------------------
# Lists and vectors
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class List(ExprNode):
    element_type: Expr


@dataclass(frozen=True, slots=True)
class ListCons(ExprNode):
    head: Expr
    tail: Expr


@dataclass(frozen=True, slots=True)
class RecList(ExprNode):
    target: Expr
    base: Expr
    step: Expr


@dataclass(frozen=True, slots=True)
class IndList(ExprNode):
    target: Expr
    motive: Expr
    base: Expr
    step: Expr


@dataclass(frozen=True, slots=True)
class Vec(ExprNode):
    element_type: Expr
    length: Expr


@dataclass(frozen=True, slots=True)
class VecCons(ExprNode):
    head: Expr
    tail: Expr


@dataclass(frozen=True, slots=True)
class VecHead(ExprNode):
    vec: Expr


@dataclass(frozen=True, slots=True)
class VecTail(ExprNode):
    vec: Expr


@dataclass(frozen=True, slots=True)
class IndVec(ExprNode):
    length: Expr
    target: Expr
    motive: Expr
    base: Expr
    step: Expr


# ---------------------------------------------------------------------------
# Either and Absurd
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Either(ExprNode):
    left_type: Expr
    right_type: Expr


@dataclass(frozen=True, slots=True)
class EitherLeft(ExprNode):
    value: Expr


@dataclass(frozen=True, slots=True)
class EitherRight(ExprNode):
    value: Expr


@dataclass(frozen=True, slots=True)
class IndEither(ExprNode):
    target: Expr
    motive: Expr
    on_left: Expr
    on_right: Expr


@dataclass(frozen=True, slots=True)
class IndAbsurd(ExprNode):
    target: Expr
    motive: Expr


# ---------------------------------------------------------------------------
# Top-level forms
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TopLevelNode:
    pass


@dataclass(frozen=True, slots=True)
class Claim(TopLevelNode):
    name: Located[str]
    type: Expr


@dataclass(frozen=True, slots=True)
class Define(TopLevelNode):
    name: Located[str]
    value: Expr


@dataclass(frozen=True, slots=True)
class CheckSame(TopLevelNode):
    type: Expr
    left: Expr
    right: Expr


@dataclass(frozen=True, slots=True)
class Example(TopLevelNode):
    expr: Expr


TopLevel = Located[TopLevelNode]
