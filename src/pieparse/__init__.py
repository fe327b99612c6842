from __future__ import annotations

from .api import iter_forms, parse_expression, parse_file, parse_source
from .errors import EndOfInput, Expected, GenericError, ParseError, PositionedError
from .spans import Located, Location, Position

__all__ = [
    "EndOfInput",
    "Expected",
    "GenericError",
    "Located",
    "Location",
    "ParseError",
    "Position",
    "PositionedError",
    "iter_forms",
    "parse_expression",
    "parse_file",
    "parse_source",
]
