"""
CLI entry points for glow-label.

Contains the main executable scripts:
- demo: animated labels in the terminal
- serve: WebSocket subject server with animation ticker
"""

from .demo import main as demo_main
from .serve import main as serve_main

__all__ = [
    "demo_main",
    "serve_main",
]
