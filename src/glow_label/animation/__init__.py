"""Per-subject gradient animation and its scheduling."""

from .state import (
    STEP_SIZE,
    EDGE_STOP,
    CENTER,
    AROUND,
    AnimationState,
    default_stops,
    new_state,
    advance,
)
from .scheduler import AnimationScheduler, RenderResult, Subject, SubjectRegistry
from .ticker import PeriodicTicker

__all__ = [
    "STEP_SIZE",
    "EDGE_STOP",
    "CENTER",
    "AROUND",
    "AnimationState",
    "default_stops",
    "new_state",
    "advance",
    "AnimationScheduler",
    "RenderResult",
    "Subject",
    "SubjectRegistry",
    "PeriodicTicker",
]
