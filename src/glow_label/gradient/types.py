"""
Core data structures for gradient rendering.

- RGB: 8-bit per channel color
- ColorStop: A color anchored at a position on the gradient (0.0-1.0)
- StopList: Ordered sequence of stops, sorted by position ascending
"""

from dataclasses import dataclass
from typing import NamedTuple


class RGB(NamedTuple):
    """
    RGB color representation.

    All channels are integers in the range 0-255.
    """
    r: int
    g: int
    b: int

    def to_hex(self) -> str:
        """Lowercase hex string like "#fe4800"."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


@dataclass(frozen=True)
class ColorStop:
    """
    A color anchored at a point on the gradient.

    Attributes:
        color: Color at that point
        position: Offset between 0 and 1 on the total gradient
    """
    color: RGB
    position: float

    def __repr__(self) -> str:
        return f"ColorStop({self.color.to_hex()}, {self.position:.3f})"


# Stops must be sorted by position ascending before evaluation
StopList = list[ColorStop]
