"""
Colorizer: applies a gradient across the characters of a label.
"""

from typing import Iterable, Sequence

from ..gradient.engine import evaluate
from ..gradient.types import RGB, StopList
from .component import TextComponent
from .formatting import TextFormatting


def colorize(units: Sequence[str], stops: StopList) -> list[tuple[str, RGB]]:
    """
    Pick a gradient color for every unit of a sequence.

    The i-th of n units samples the gradient at (i + 1) / n, so the last
    unit always lands exactly on 1.0 and the first one sits one unit's
    width into the gradient.

    Args:
        units: Atomic text elements, e.g. the characters of a string
        stops: Stops making up the gradient (sorted by position ascending)

    Returns:
        List of (unit, color) pairs in input order
    """
    count = len(units)
    return [
        (unit, evaluate(stops, (i + 1) / count))
        for i, unit in enumerate(units)
    ]


def gradientize(
    text: str,
    stops: StopList,
    formatting: Iterable[TextFormatting] = (),
) -> TextComponent:
    """
    Create a gradient text component from a plain string.

    Args:
        text: Plain string to add a gradient to
        stops: Stops making up the gradient (sorted by position ascending)
        formatting: Flags to enable on the resulting component

    Returns:
        Component with one colored segment per character
    """
    component = TextComponent()
    for unit, color in colorize(text, stops):
        component.append(unit, color)
    for fmt in formatting:
        component.toggle_formatting(fmt, True)
    return component
