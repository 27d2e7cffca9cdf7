"""
Gradient preset registry with built-in presets.

Usage:
    from glow_label.gradient.presets import get_preset, PRESETS

    fire = get_preset("fire")
    print(PRESETS.keys())  # Available preset names
"""

from .notation import parse_notation
from .types import StopList

# Global preset registry
PRESETS: dict[str, StopList] = {}


def register_preset(name: str, stops: StopList) -> None:
    """Register a preset in the global registry."""
    PRESETS[name] = list(stops)


def get_preset(name: str) -> StopList | None:
    """Get a copy of a preset's stops by name."""
    stops = PRESETS.get(name)
    if stops is None:
        return None
    return list(stops)


def list_presets() -> list[str]:
    """Get list of all registered preset names."""
    return list(PRESETS.keys())


# Built-in preset definitions, written in gradient notation
_BUILTINS: dict[str, str] = {
    # The default animated look, frozen at its starting frame
    "ember": "<#FE4800:0 #FDFC00:.5 #FE4800:1>",
    "fire": "<#FF0000:0 #FF4500:.33 #FF8C00:.66 #FFD700:1>",
    "sunset": "<#FF00FF:0 #FF4500:.5 #9400D3:1>",
    "ocean": "<#0066FF:0 #00FFFF:.5 #008080:1>",
    "ice": "<#00FFFF:0 #FFFFFF:.5 #0066FF:1>",
    "neon": "<#FF1493:0 #00FFFF:.5 #00FF00:1>",
    "rainbow": (
        "<#FF0000:0 #FF8000:.16 #FFFF00:.33 #00FF00:.5 "
        "#00FFFF:.66 #0000FF:.83 #8B00FF:1>"
    ),
    "mono": "<#FFFFFF:0 #808080:1>",
}

# Register all built-in presets on module import
for name, notation in _BUILTINS.items():
    register_preset(name, parse_notation(notation).unwrap())
