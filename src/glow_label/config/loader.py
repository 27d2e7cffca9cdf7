"""Configuration file loading and saving."""

from pathlib import Path
from typing import Any
import yaml

from .schema import (
    GlowLabelConfig,
    AnimationConfig,
    LabelConfig,
    ServerConfig,
    LoggingConfig,
)


def load_config(config_path: Path) -> GlowLabelConfig:
    """
    Load configuration from YAML file.

    Missing sections and keys fall back to their defaults.

    Raises:
        ValueError: If a value is invalid
    """
    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Parse animation config
    defaults = AnimationConfig()
    animation_data = data.get("animation") or {}
    animation = AnimationConfig(
        period=float(animation_data.get("period", defaults.period)),
        step_size=float(animation_data.get("step_size", defaults.step_size)),
        edge_stop=float(animation_data.get("edge_stop", defaults.edge_stop)),
        center_color=str(animation_data.get("center_color", defaults.center_color)),
        around_color=str(animation_data.get("around_color", defaults.around_color)),
    )

    # Parse label config
    label_data = data.get("label") or {}
    label = LabelConfig(template=label_data.get("template", LabelConfig.template))
    if "formatting" in label_data:
        label.formatting = list(label_data["formatting"] or [])

    # Parse server config
    server_data = data.get("server") or {}
    server = ServerConfig(
        host=server_data.get("host", ServerConfig.host),
        port=int(server_data.get("port", ServerConfig.port)),
    )

    # Parse logging config
    logging_data = data.get("logging") or {}
    logging_config = LoggingConfig(
        level=str(logging_data.get("level", LoggingConfig.level)),
        file=logging_data.get("file"),
    )

    config = GlowLabelConfig(
        animation=animation,
        label=label,
        server=server,
        logging=logging_config,
    )
    config.validate()
    return config


def save_config(config: GlowLabelConfig, config_path: Path) -> None:
    """Save configuration to YAML file."""
    data: dict[str, Any] = {
        "animation": {
            "period": config.animation.period,
            "step_size": config.animation.step_size,
            "edge_stop": config.animation.edge_stop,
            "center_color": config.animation.center_color,
            "around_color": config.animation.around_color,
        },
        "label": {
            "template": config.label.template,
            "formatting": list(config.label.formatting),
        },
        "server": {
            "host": config.server.host,
            "port": config.server.port,
        },
        "logging": {
            "level": config.logging.level,
        },
    }

    if config.logging.file:
        data["logging"]["file"] = config.logging.file

    with open(config_path, "w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
