"""
Rich text component: a label made of individually colored segments.

The JSON form mirrors chat-component style structured text:

    {"text": "", "bold": true, "extra": [{"text": "F", "color": "#fe4800"}, ...]}
"""

import json
from dataclasses import dataclass, field
from typing import Any

from ..gradient.types import RGB
from .formatting import ANSI_CODES, TextFormatting

ANSI_RESET = "\x1b[0m"


@dataclass(frozen=True)
class TextSegment:
    """A run of text rendered in a single color (None = inherit)."""
    text: str
    color: RGB | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {"text": self.text}
        if self.color is not None:
            data["color"] = self.color.to_hex()
        return data


@dataclass
class TextComponent:
    """
    A root text component with colored child segments.

    Formatting flags apply to the whole component and are inherited
    by every segment.
    """
    text: str = ""
    segments: list[TextSegment] = field(default_factory=list)
    formatting: set[TextFormatting] = field(default_factory=set)

    def append(self, text: str, color: RGB | None = None) -> "TextComponent":
        """Append a segment; returns self for chaining."""
        self.segments.append(TextSegment(text, color))
        return self

    def toggle_formatting(self, fmt: TextFormatting, enabled: bool) -> None:
        """Enable or disable a formatting flag."""
        if enabled:
            self.formatting.add(fmt)
        else:
            self.formatting.discard(fmt)

    def is_formatted(self, fmt: TextFormatting) -> bool:
        return fmt in self.formatting

    @property
    def plain_text(self) -> str:
        """Text content without any colors or formatting."""
        return self.text + "".join(segment.text for segment in self.segments)

    def to_json(self) -> dict[str, Any]:
        """Structured JSON form (flags in declaration order)."""
        data: dict[str, Any] = {"text": self.text}
        for fmt in TextFormatting:
            if fmt in self.formatting:
                data[fmt.json_key] = True
        if self.segments:
            data["extra"] = [segment.to_json() for segment in self.segments]
        return data

    def to_json_string(self) -> str:
        """Compact JSON string."""
        return json.dumps(self.to_json(), separators=(",", ":"))

    def to_ansi(self) -> str:
        """Render for a truecolor terminal."""
        prefix = "".join(
            f"\x1b[{ANSI_CODES[fmt]}m" for fmt in TextFormatting if fmt in self.formatting
        )
        parts = [prefix, self.text]
        for segment in self.segments:
            if segment.color is not None:
                r, g, b = segment.color
                parts.append(f"\x1b[38;2;{r};{g};{b}m")
            parts.append(segment.text)
        parts.append(ANSI_RESET)
        return "".join(parts)
