"""
glow-label: animated multi-stop gradient labels.

This package provides:
- Gradient evaluation over any number of color stops
- A compact gradient notation ("<#FF0000:0 #0000FF:1>")
- Per-character label coloring with formatting flags
- A per-subject bouncing animation driven by a fixed-rate ticker
"""

from .gradient import (
    RGB,
    ColorStop,
    StopList,
    evaluate,
    parse_notation,
    format_notation,
    NotationError,
    ParseResult,
)
from .text import TextComponent, TextFormatting, colorize, gradientize
from .animation import (
    AnimationState,
    AnimationScheduler,
    RenderResult,
    PeriodicTicker,
    advance,
    new_state,
)

__version__ = "0.1.0"

__all__ = [
    # Gradient
    "RGB",
    "ColorStop",
    "StopList",
    "evaluate",
    "parse_notation",
    "format_notation",
    "NotationError",
    "ParseResult",
    # Text
    "TextComponent",
    "TextFormatting",
    "colorize",
    "gradientize",
    # Animation
    "AnimationState",
    "AnimationScheduler",
    "RenderResult",
    "PeriodicTicker",
    "advance",
    "new_state",
]
