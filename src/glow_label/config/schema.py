"""Configuration dataclasses."""

from dataclasses import dataclass, field
from typing import Optional

from ..gradient.color import resolve_color
from ..gradient.types import RGB
from ..text.formatting import TextFormatting

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AnimationConfig:
    """Animation timing and colors."""
    period: float = 0.05  # Seconds between ticks
    step_size: float = 0.03  # Middle stop movement per tick
    edge_stop: float = 0.12  # Turn-around margin to the gradient ends
    center_color: str = "#FDFC00"  # Hex or a named color
    around_color: str = "#FE4800"

    @property
    def center_rgb(self) -> RGB:
        return resolve_color(self.center_color)

    @property
    def around_rgb(self) -> RGB:
        return resolve_color(self.around_color)

    def validate(self) -> None:
        if self.period <= 0:
            raise ValueError(f"animation.period must be positive, got {self.period}")
        if not 0 < self.step_size < 1:
            raise ValueError(f"animation.step_size must be within (0, 1), got {self.step_size}")
        if not 0 <= self.edge_stop < 0.5:
            raise ValueError(f"animation.edge_stop must be within [0, 0.5), got {self.edge_stop}")
        # A larger step could carry the middle stop past an outer stop
        if self.step_size > self.edge_stop:
            raise ValueError(
                f"animation.step_size ({self.step_size}) must not exceed "
                f"animation.edge_stop ({self.edge_stop})"
            )
        # Raises ValueError on malformed hex or unknown names
        resolve_color(self.center_color)
        resolve_color(self.around_color)


@dataclass
class LabelConfig:
    """How a subject's label text is built and formatted."""
    template: str = "FancyItem | {name}"
    formatting: list[str] = field(default_factory=lambda: ["bold"])

    def render(self, name: str) -> str:
        """Build the label text for a subject name."""
        return self.template.format(name=name)

    def formatting_flags(self) -> list[TextFormatting]:
        return [TextFormatting.from_name(value) for value in self.formatting]

    def validate(self) -> None:
        self.formatting_flags()
        try:
            self.render("")
        except (KeyError, IndexError) as e:
            raise ValueError(f"label.template has an unknown placeholder: {e}")


@dataclass
class ServerConfig:
    """WebSocket subject server."""
    host: str = "localhost"
    port: int = 9877


@dataclass
class LoggingConfig:
    """Log output."""
    level: str = "INFO"
    file: Optional[str] = None  # Also log to this file if set

    def validate(self) -> None:
        if self.level.upper() not in LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {LOG_LEVELS}, got {self.level}")


@dataclass
class GlowLabelConfig:
    """Main application configuration."""
    animation: AnimationConfig = field(default_factory=AnimationConfig)
    label: LabelConfig = field(default_factory=LabelConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Check all sections, raising ValueError on the first problem."""
        self.animation.validate()
        self.label.validate()
        self.logging.validate()

    @classmethod
    def with_defaults(cls) -> "GlowLabelConfig":
        """Create config with sensible defaults."""
        return cls()
