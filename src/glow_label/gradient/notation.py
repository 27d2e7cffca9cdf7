"""
Gradient notation parser.

Parses strings like "<#FF0000:0 #00FF00:.5 #0000FF:1>" into a sorted
list of color stops, and formats stop lists back into that notation.

Grammar:
    notation := "<" stop (" " stop)* ">"
    stop     := "#" RRGGBB ":" position
    position := real number in [0, 1]
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from .color import hex_to_rgb, rgb_to_hex
from .types import ColorStop, StopList

# Plain decimal or exponent form: "0", "1", ".5", "0.25", "1e-1"
_POSITION = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


class NotationError(ValueError):
    """Raised (or returned) when a gradient notation is malformed."""


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing a gradient notation.

    Exactly one of stops/error is set.
    """
    stops: StopList | None = None
    error: NotationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> StopList:
        """Return the parsed stops, raising the parse error on failure."""
        if self.error is not None:
            raise self.error
        return list(self.stops)


def parse_notation(notation: str) -> ParseResult:
    """
    Parse a gradient notation into a stop list sorted by position.

    Any malformed part fails the whole notation; there are no partial
    results. Malformed input is reported through the result, never raised.

    Examples:
        "<#FF0000:0 #0000FF:1>"            -> red to blue
        "<#FE4800:0 #FDFC00:.5 #FE4800:1>" -> orange, yellow center, orange

    Returns:
        ParseResult with the sorted stops, or the error describing the problem
    """
    try:
        stops = _parse_stops(notation)
    except NotationError as e:
        return ParseResult(error=e)

    # sorted() is stable, so equal positions keep their input order
    return ParseResult(stops=sorted(stops, key=lambda stop: stop.position))


def _parse_stops(notation: str) -> StopList:
    if len(notation) < 2 or not (notation.startswith("<") and notation.endswith(">")):
        raise NotationError(f"Notation must be enclosed in angle brackets: {notation!r}")

    body = notation[1:-1]
    if not body:
        raise NotationError("Notation contains no color stops")

    return [_parse_token(token) for token in body.split(" ")]


def _parse_token(token: str) -> ColorStop:
    """Parse a single "#RRGGBB:position" token."""
    if not token:
        raise NotationError("Empty color stop (stops are separated by single spaces)")

    parts = token.split(":")
    if len(parts) != 2:
        raise NotationError(f"Color stop must look like #RRGGBB:position: {token!r}")

    hex_part, position_part = parts

    try:
        color = hex_to_rgb(hex_part)
    except ValueError:
        raise NotationError(f"Invalid hex color {hex_part!r} in {token!r}")

    if not _POSITION.fullmatch(position_part):
        raise NotationError(f"Invalid position {position_part!r} in {token!r}")
    position = float(position_part)

    if not 0.0 <= position <= 1.0:
        raise NotationError(f"Position out of range 0-1: {position_part!r} in {token!r}")

    return ColorStop(color, position)


def format_notation(stops: StopList) -> str:
    """
    Format a stop list as gradient notation.

    Positions are written with repr() so parsing the output gives back
    exactly the same stops.
    """
    tokens = [f"{rgb_to_hex(stop.color)}:{_format_position(stop.position)}" for stop in stops]
    return "<" + " ".join(tokens) + ">"


def _format_position(position: float) -> str:
    if not math.isfinite(position):
        raise ValueError(f"Cannot format non-finite position: {position}")
    return repr(float(position))
