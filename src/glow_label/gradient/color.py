"""
Color utilities for gradient rendering.

Provides hex conversion and color name resolution.
"""

import re

from .types import RGB

WHITE = RGB(255, 255, 255)
BLACK = RGB(0, 0, 0)

_HEX_COLOR = re.compile(r"#[0-9a-fA-F]{6}")


def rgb_to_hex(color: RGB) -> str:
    """
    Convert RGB color to hex string.

    Args:
        color: RGB color tuple

    Returns:
        Uppercase hex string like "#FE4800"
    """
    return f"#{color.r:02X}{color.g:02X}{color.b:02X}"


def hex_to_rgb(hex_color: str) -> RGB:
    """
    Convert a strict "#RRGGBB" hex string to RGB.

    Args:
        hex_color: Hex string like "#FE4800" (case-insensitive)

    Returns:
        RGB color tuple

    Raises:
        ValueError: If the string is not '#' followed by exactly 6 hex digits
    """
    if not _HEX_COLOR.fullmatch(hex_color):
        raise ValueError(f"Invalid hex color: {hex_color}")

    return RGB(
        int(hex_color[1:3], 16),
        int(hex_color[3:5], 16),
        int(hex_color[5:7], 16),
    )


# Named colors
NAMED_COLORS: dict[str, RGB] = {
    "white": WHITE,
    "black": BLACK,
    "red": RGB(255, 0, 0),
    "green": RGB(0, 255, 0),
    "blue": RGB(0, 0, 255),
    "yellow": RGB(255, 255, 0),
    "cyan": RGB(0, 255, 255),
    "magenta": RGB(255, 0, 255),
    # Default animation colors
    "ember": RGB(254, 72, 0),
    "flare": RGB(253, 252, 0),
}


def resolve_color(color: RGB | str) -> RGB:
    """
    Resolve a color that may be a name string, hex string, or RGB tuple.

    Raises:
        ValueError: If the name is unknown or the hex string is malformed
    """
    if isinstance(color, RGB):
        return color
    if color.startswith("#"):
        return hex_to_rgb(color)
    name = color.lower().strip()
    if name in NAMED_COLORS:
        return NAMED_COLORS[name]
    raise ValueError(f"Unknown color name: {color}")
