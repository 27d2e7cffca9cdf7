"""Text formatting flags and their marker characters."""

from enum import Enum


class TextFormatting(Enum):
    """Formatting flags that can be toggled on a text component."""

    BOLD = ("l", "bold")
    ITALIC = ("o", "italic")
    UNDERLINED = ("n", "underlined")
    STRIKETHROUGH = ("m", "strikethrough")
    OBFUSCATED = ("k", "obfuscated")

    def __init__(self, marker: str, json_key: str):
        self.marker = marker
        self.json_key = json_key

    @classmethod
    def from_marker(cls, marker: str) -> "TextFormatting | None":
        """Find a formatting flag by its marker character, or None if unknown."""
        return FORMATTING_BY_MARKER.get(marker)

    @classmethod
    def from_name(cls, value: str) -> "TextFormatting":
        """
        Resolve a flag from its name ("bold", "BOLD") or marker ("l").

        Raises:
            ValueError: If nothing matches
        """
        by_marker = cls.from_marker(value)
        if by_marker is not None:
            return by_marker
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown text formatting: {value}")


# Marker character -> flag (the marker set is closed)
FORMATTING_BY_MARKER: dict[str, TextFormatting] = {
    fmt.marker: fmt for fmt in TextFormatting
}

# SGR codes for terminal rendering
ANSI_CODES: dict[TextFormatting, int] = {
    TextFormatting.BOLD: 1,
    TextFormatting.ITALIC: 3,
    TextFormatting.UNDERLINED: 4,
    TextFormatting.OBFUSCATED: 5,  # Closest terminal equivalent: blink
    TextFormatting.STRIKETHROUGH: 9,
}
