from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from .errors import END_OF_INPUT, GENERIC, Expected, ParseErr, PositionedError, furthest
from .spans import START, Located, Location, Position, advance, advance_char


T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Context:
    """Read-only per-parse settings."""

    source_id: str


@dataclass(frozen=True, slots=True)
class Cursor:
    """Parse progress: an offset into the (shared, immutable) source and its position."""

    source: str
    offset: int = 0
    pos: Position = START

    @classmethod
    def start(cls, text: str) -> Cursor:
        return cls(source=text)

    @property
    def remaining(self) -> str:
        return self.source[self.offset :]

    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    def peek(self) -> str:
        if self.at_end():
            return ""
        return self.source[self.offset]

    def step(self) -> Cursor:
        ch = self.source[self.offset]
        return Cursor(self.source, self.offset + 1, advance_char(self.pos, ch))

    def skip(self, text: str) -> Cursor:
        return Cursor(self.source, self.offset + len(text), advance(self.pos, text))


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T
    cursor: Cursor


@dataclass(frozen=True, slots=True)
class Failure:
    error: PositionedError


ParseFn = Callable[[Context, Cursor], "Success[T] | Failure"]


def _fail_at(cur: Cursor, err: ParseErr) -> Failure:
    return Failure(PositionedError(cur.pos, err))


def _label(p: Parser[Any]) -> str:
    return p.name or p.fn.__name__


@dataclass(frozen=True, slots=True)
class Parser(Generic[T]):
    """A pure function from (context, cursor) to a success or a failure.

    Operators:
      - `p | q`  ordered choice with full backtracking
      - `p >> q` run both, keep q's value
      - `p << q` run both, keep p's value

    Unary combinators keep the name of the parser they wrap; binary ones
    join both names with their operator.
    """

    fn: ParseFn
    name: str | None = None

    def __call__(self, ctx: Context, cur: Cursor) -> Success[T] | Failure:
        return self.fn(ctx, cur)

    def __repr__(self) -> str:
        return f"Parser({_label(self)})"

    def map(self, f: Callable[[T], U]) -> Parser[U]:
        def run(ctx: Context, cur: Cursor) -> Success[U] | Failure:
            r = self.fn(ctx, cur)
            if isinstance(r, Failure):
                return r
            return Success(f(r.value), r.cursor)

        return Parser(run, self.name)

    def bind(self, f: Callable[[T], Parser[U]]) -> Parser[U]:
        def run(ctx: Context, cur: Cursor) -> Success[U] | Failure:
            r = self.fn(ctx, cur)
            if isinstance(r, Failure):
                return r
            return f(r.value).fn(ctx, r.cursor)

        return Parser(run, self.name)

    def __or__(self, other: Parser[T]) -> Parser[T]:
        return alt(self, other)

    def __rshift__(self, other: Parser[U]) -> Parser[U]:
        def run(ctx: Context, cur: Cursor) -> Success[U] | Failure:
            r = self.fn(ctx, cur)
            if isinstance(r, Failure):
                return r
            return other.fn(ctx, r.cursor)

        return Parser(run, f"{_label(self)}>>{_label(other)}")

    def __lshift__(self, other: Parser[Any]) -> Parser[T]:
        def run(ctx: Context, cur: Cursor) -> Success[T] | Failure:
            r = self.fn(ctx, cur)
            if isinstance(r, Failure):
                return r
            r2 = other.fn(ctx, r.cursor)
            if isinstance(r2, Failure):
                return r2
            return Success(r.value, r2.cursor)

        return Parser(run, f"{_label(self)}<<{_label(other)}")


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def pure(value: T) -> Parser[T]:
    return Parser(lambda ctx, cur: Success(value, cur), "pure")


def fail(err: ParseErr) -> Parser[Any]:
    return Parser(lambda ctx, cur: _fail_at(cur, err), "fail")


def _any_char(ctx: Context, cur: Cursor) -> Success[str] | Failure:
    if cur.at_end():
        return _fail_at(cur, END_OF_INPUT)
    return Success(cur.peek(), cur.step())


any_char: Parser[str] = Parser(_any_char, "char")


def literal_char(c: str) -> Parser[str]:
    expected = Expected.char(c)

    def run(ctx: Context, cur: Cursor) -> Success[str] | Failure:
        if cur.at_end():
            return _fail_at(cur, END_OF_INPUT)
        if cur.peek() != c:
            return _fail_at(cur, expected)
        return Success(c, cur.step())

    return Parser(run, repr(c))


def char_matching(desc: str, predicate: Callable[[str], bool]) -> Parser[str]:
    expected = Expected.description(desc)

    def run(ctx: Context, cur: Cursor) -> Success[str] | Failure:
        if cur.at_end():
            return _fail_at(cur, END_OF_INPUT)
        ch = cur.peek()
        if not predicate(ch):
            return _fail_at(cur, expected)
        return Success(ch, cur.step())

    return Parser(run, desc)


def literal_string(s: str) -> Parser[str]:
    def run(ctx: Context, cur: Cursor) -> Success[str] | Failure:
        for c in s:
            if cur.at_end():
                return _fail_at(cur, END_OF_INPUT)
            if cur.peek() != c:
                return _fail_at(cur, Expected.char(c))
            cur = cur.step()
        return Success(s, cur)

    return Parser(run, repr(s))


def spanning(predicate: Callable[[str], bool]) -> Parser[str]:
    """Consume the longest (possibly empty) prefix whose characters satisfy `predicate`."""

    def run(ctx: Context, cur: Cursor) -> Success[str] | Failure:
        src = cur.source
        end = cur.offset
        while end < len(src) and predicate(src[end]):
            end += 1
        text = src[cur.offset : end]
        return Success(text, cur.skip(text))

    return Parser(run, "spanning")


def _eof(ctx: Context, cur: Cursor) -> Success[None] | Failure:
    if cur.at_end():
        return Success(None, cur)
    return _fail_at(cur, END_OF_INPUT)


eof: Parser[None] = Parser(_eof, "eof")


# ---------------------------------------------------------------------------
# Combinators
# ---------------------------------------------------------------------------


def alt(p1: Parser[T], p2: Parser[T]) -> Parser[T]:
    """Ordered choice: try `p1`, then `p2` from the same cursor.

    When both fail, the failure that got further wins; equal positions merge.
    """
    return choice(p1, p2)


def choice(*parsers: Parser[T]) -> Parser[T]:
    """`alt` over any number of parsers, tried in order within one frame."""
    if not parsers:
        return fail(GENERIC)

    first, rest = parsers[0], parsers[1:]

    def run(ctx: Context, cur: Cursor) -> Success[T] | Failure:
        r = first.fn(ctx, cur)
        if isinstance(r, Success):
            return r
        error = r.error
        for p in rest:
            r = p.fn(ctx, cur)
            if isinstance(r, Success):
                return r
            error = furthest(error, r.error)
        return Failure(error)

    return Parser(run, "|".join(_label(p) for p in parsers))


def apply(ctor: Callable[..., T], *parsers: Parser[Any]) -> Parser[T]:
    """Run `parsers` in order and build `ctor(*values)`."""

    def run(ctx: Context, cur: Cursor) -> Success[T] | Failure:
        values: list[Any] = []
        for p in parsers:
            r = p.fn(ctx, cur)
            if isinstance(r, Failure):
                return r
            values.append(r.value)
            cur = r.cursor
        return Success(ctor(*values), cur)

    return Parser(run, getattr(ctor, "__name__", "apply"))


def _tuple(*values: Any) -> tuple[Any, ...]:
    return values


def seq(*parsers: Parser[Any]) -> Parser[tuple[Any, ...]]:
    return Parser(apply(_tuple, *parsers).fn, "seq")


def rep(p: Parser[T]) -> Parser[tuple[T, ...]]:
    """Zero or more `p`. Never fails; the final failed attempt is discarded."""

    def run(ctx: Context, cur: Cursor) -> Success[tuple[T, ...]] | Failure:
        values: list[T] = []
        while True:
            r = p.fn(ctx, cur)
            if isinstance(r, Failure):
                return Success(tuple(values), cur)
            if r.cursor.offset == cur.offset:
                raise RuntimeError(f"rep() over {p!r} succeeded without consuming input at {cur.pos}")
            values.append(r.value)
            cur = r.cursor

    return Parser(run, f"rep({p.name})")


def rep1(p: Parser[T]) -> Parser[tuple[T, ...]]:
    return apply(lambda first, rest: (first, *rest), p, rep(p))


def many_till(p: Parser[T], end: Parser[Any]) -> Parser[tuple[T, ...]]:
    """Repeat `p` until `end` succeeds.

    Each step is `end | p`, so when neither matches the deeper failure is reported.
    """

    def run(ctx: Context, cur: Cursor) -> Success[tuple[T, ...]] | Failure:
        values: list[T] = []
        while True:
            done = end.fn(ctx, cur)
            if isinstance(done, Success):
                return Success(tuple(values), done.cursor)
            r = p.fn(ctx, cur)
            if isinstance(r, Failure):
                return Failure(furthest(done.error, r.error))
            if r.cursor.offset == cur.offset:
                raise RuntimeError(f"many_till() over {p!r} succeeded without consuming input at {cur.pos}")
            values.append(r.value)
            cur = r.cursor

    return Parser(run, f"many_till({p.name})")


def located(p: Parser[T]) -> Parser[Located[T]]:
    def run(ctx: Context, cur: Cursor) -> Success[Located[T]] | Failure:
        r = p.fn(ctx, cur)
        if isinstance(r, Failure):
            return r
        loc = Location(source=ctx.source_id, start=cur.pos, end=r.cursor.pos)
        return Success(Located(loc, r.value), r.cursor)

    return Parser(run, p.name)


def describe(desc: str, p: Parser[T]) -> Parser[T]:
    """Name a production so that failing at its start reports `desc`."""
    return Parser(alt(p, fail(Expected.description(desc))).fn, desc)


def guard(p: Parser[T], predicate: Callable[[T], bool], err: ParseErr) -> Parser[T]:
    """Run `p`, rejecting values that fail `predicate`.

    A rejection is reported at the cursor where `p` started.
    """

    def run(ctx: Context, cur: Cursor) -> Success[T] | Failure:
        r = p.fn(ctx, cur)
        if isinstance(r, Failure):
            return r
        if not predicate(r.value):
            return _fail_at(cur, err)
        return r

    return Parser(run, p.name)


def defer(thunk: Callable[[], Parser[T]]) -> Parser[T]:
    """Resolve a parser on first use; for recursive productions."""

    def run(ctx: Context, cur: Cursor) -> Success[T] | Failure:
        return thunk().fn(ctx, cur)

    return Parser(run, "deferred")


# ---------------------------------------------------------------------------
# Running parsers
# ---------------------------------------------------------------------------


def keep_parsing(source_id: str, cursor: Cursor, parser: Parser[T]) -> Success[T] | Failure:
    """Continue from a cursor left by an earlier successful parse."""
    return parser.fn(Context(source_id), cursor)


def start_parsing(source_id: str, text: str, parser: Parser[T]) -> Success[T] | Failure:
    """Parse some prefix of `text`; the result's cursor holds the rest."""
    return keep_parsing(source_id, Cursor.start(text), parser)


def parse(source_id: str, parser: Parser[T], text: str) -> Success[T] | Failure:
    """Run `parser` over `text` from position 1:1.

    Unconsumed trailing text is ignored unless `parser` itself ends in `eof`.
    """
    return start_parsing(source_id, text, parser)
