"""
Gradient evaluation engine.

Picks the color at a point on a linear gradient made up of any number
of color stops.
"""

import math

from .color import WHITE
from .types import RGB, StopList


def evaluate(stops: StopList, position: float) -> RGB:
    """
    Get the color at a position on a multi-stop linear gradient.

    Never fails: an empty stop list renders white, a single stop renders
    its own color everywhere, and positions outside the outermost stops
    take the color of the nearest one. A NaN position takes the first color.

    Args:
        stops: Stops making up the gradient (sorted by position ascending)
        position: Position to pick the color at (not required to be clamped)

    Returns:
        Interpolated RGB color
    """
    if not stops:
        return WHITE

    if len(stops) == 1:
        return stops[0].color

    # Before the first stop, the gradient is that stop's color statically.
    # NaN compares false everywhere, so it lands here too
    first = stops[0]
    if position <= first.position or math.isnan(position):
        return first.color

    # Same for everything past the last stop
    last = stops[-1]
    if position >= last.position:
        return last.color

    # Narrow the bracketing pair down from (first, last) using the interior stops
    a, b = first, last
    for stop in stops[1:-1]:
        if stop.position < position and stop.position > a.position:
            a = stop

        # Exact hits belong to the upper bracket, so a stop's own color is reachable
        if stop.position >= position and stop.position < b.position:
            b = stop

    # How far into the a..b section the position is, from 0 to 1
    t = (position - a.position) / (b.position - a.position)

    return RGB(
        _lerp_channel(a.color.r, b.color.r, t),
        _lerp_channel(a.color.g, b.color.g, t),
        _lerp_channel(a.color.b, b.color.b, t),
    )


def _lerp_channel(start: int, end: int, t: float) -> int:
    # Floor, not int(): negative deltas must round down
    return math.floor(start + t * (end - start))
