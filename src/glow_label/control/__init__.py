"""WebSocket subject server."""

from .server import LabelServer, WebSocketSubject, DEFAULT_PORT

__all__ = [
    "LabelServer",
    "WebSocketSubject",
    "DEFAULT_PORT",
]
