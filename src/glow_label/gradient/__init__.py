"""
Multi-stop linear gradients.

Example:
    from glow_label.gradient import parse_notation, evaluate

    stops = parse_notation("<#FF0000:0 #00FF00:.5 #0000FF:1>").unwrap()
    evaluate(stops, 0.25)  # RGB(r=127, g=127, b=0)
"""

# Core types
from .types import RGB, ColorStop, StopList

# Colors
from .color import WHITE, BLACK, NAMED_COLORS, hex_to_rgb, rgb_to_hex, resolve_color

# Engine
from .engine import evaluate

# Notation
from .notation import NotationError, ParseResult, parse_notation, format_notation

# Presets
from .presets import PRESETS, get_preset, register_preset, list_presets

__all__ = [
    # Core types
    "RGB",
    "ColorStop",
    "StopList",
    # Colors
    "WHITE",
    "BLACK",
    "NAMED_COLORS",
    "hex_to_rgb",
    "rgb_to_hex",
    "resolve_color",
    # Engine
    "evaluate",
    # Notation
    "NotationError",
    "ParseResult",
    "parse_notation",
    "format_notation",
    # Presets
    "PRESETS",
    "get_preset",
    "register_preset",
    "list_presets",
]
