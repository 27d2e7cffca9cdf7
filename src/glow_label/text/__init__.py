"""Gradient-colored text labels."""

from .formatting import TextFormatting, FORMATTING_BY_MARKER
from .component import TextComponent, TextSegment
from .colorizer import colorize, gradientize

__all__ = [
    "TextFormatting",
    "FORMATTING_BY_MARKER",
    "TextComponent",
    "TextSegment",
    "colorize",
    "gradientize",
]
