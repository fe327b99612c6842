from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

from .ast import Expr, TopLevel
from .errors import GENERIC, ParseError, PositionedError
from .grammar import expr, program, top_level
from .lexer import spacing
from .parser import Cursor, Failure, Parser, Success, eof, keep_parsing
from .spans import Position, advance_char


log = logging.getLogger(__name__)

T = TypeVar("T")

# Each level of parenthesized nesting costs a handful of Python frames.
RECURSION_LIMIT = 20_000

TOO_DEEP = "expression nested too deeply"


@contextmanager
def _recursion_limit(limit: int) -> Iterator[None]:
    old = sys.getrecursionlimit()
    sys.setrecursionlimit(max(old, limit))
    try:
        yield
    finally:
        sys.setrecursionlimit(old)


def _deepest_open_paren(cur: Cursor) -> Position:
    """Position of the most deeply nested "(" in the rest of the input."""
    pos = best_pos = cur.pos
    depth = best = 0
    in_comment = False
    for ch in cur.remaining:
        if in_comment:
            in_comment = ch != "\n"
        elif ch == ";":
            in_comment = True
        elif ch == "(":
            depth += 1
            if depth > best:
                best, best_pos = depth, pos
        elif ch == ")":
            depth -= 1
        pos = advance_char(pos, ch)
    return best_pos


def _run(file: str, cur: Cursor, parser: Parser[T]) -> Success[T]:
    try:
        with _recursion_limit(RECURSION_LIMIT):
            res = keep_parsing(file, cur, parser)
    except RecursionError:
        pos = _deepest_open_paren(cur)
        log.debug("recursion limit hit parsing %s near %s", file, pos)
        raise ParseError(
            file=file, error=PositionedError(pos, GENERIC), source=cur.source, detail=TOO_DEEP
        ) from None
    if isinstance(res, Failure):
        raise ParseError(file=file, error=res.error, source=cur.source)
    return res


def parse_source(src: str, *, file: str = "<memory>") -> tuple[TopLevel, ...]:
    """Parse a complete `#lang pie` program."""
    res = _run(file, Cursor.start(src), program)
    log.debug("parsed %d top-level forms from %s", len(res.value), file)
    return res.value


def parse_file(path: str | Path) -> tuple[TopLevel, ...]:
    p = Path(path).expanduser().resolve()
    log.debug("reading %s", p)
    src = p.read_text(encoding="utf-8")
    return parse_source(src, file=str(p))


def parse_expression(src: str, *, file: str = "<memory>", allow_trailing: bool = False) -> Expr:
    """Parse a single expression, optionally tolerating unparsed trailing text."""
    parser = spacing >> expr
    if not allow_trailing:
        parser = parser << eof
    return _run(file, Cursor.start(src), parser).value


def iter_forms(src: str, *, file: str = "<memory>") -> Iterator[TopLevel]:
    """Yield top-level forms one at a time, as an interactive session reads them.

    No `#lang` header is expected. Parsing resumes from the cursor left by the
    previous form, so earlier text is never re-read.
    """
    cur = _run(file, Cursor.start(src), spacing).cursor
    while not cur.at_end():
        res = _run(file, cur, top_level)
        cur = res.cursor
        yield res.value
