"""Configuration schema and loading."""

from .schema import (
    GlowLabelConfig,
    AnimationConfig,
    LabelConfig,
    ServerConfig,
    LoggingConfig,
)
from .loader import load_config, save_config

__all__ = [
    "GlowLabelConfig",
    "AnimationConfig",
    "LabelConfig",
    "ServerConfig",
    "LoggingConfig",
    "load_config",
    "save_config",
]
