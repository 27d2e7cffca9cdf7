"""
Per-subject animation state.

The default animation is a three-stop gradient whose middle stop bounces
back and forth between the edges:

    AROUND@0.0 -- CENTER@x -- AROUND@1.0,   x oscillating in ~(0.12, 0.88)
"""

from dataclasses import dataclass, replace

from ..gradient.types import RGB, ColorStop, StopList

# How far the middle stop moves per tick
STEP_SIZE = 0.03

# Margin to the gradient ends at which the middle stop turns around
EDGE_STOP = 0.12

CENTER = RGB(253, 252, 0)
AROUND = RGB(254, 72, 0)


@dataclass
class AnimationState:
    """
    Mutable animation record, owned by the scheduler.

    Attributes:
        stops: Current gradient stops (see `animated` for which ones move)
        forwards: True while the middle stop's position is increasing
    """
    stops: StopList
    forwards: bool = True

    @property
    def animated(self) -> bool:
        """Three stops spanning exactly 0..1; anything else renders statically."""
        return (
            len(self.stops) == 3
            and self.stops[0].position == 0.0
            and self.stops[2].position == 1.0
        )


def default_stops(center: RGB = CENTER, around: RGB = AROUND) -> StopList:
    """Initial stops of the bouncing animation."""
    return [
        ColorStop(around, 0.0),
        ColorStop(center, 0.5),
        ColorStop(around, 1.0),
    ]


def new_state(center: RGB = CENTER, around: RGB = AROUND) -> AnimationState:
    """Create the state for a subject seen for the first time."""
    return AnimationState(stops=default_stops(center, around), forwards=True)


def advance(
    state: AnimationState,
    step_size: float = STEP_SIZE,
    edge_stop: float = EDGE_STOP,
) -> None:
    """
    Move the middle stop one step, turning around near the edges.

    The edge check uses the position before stepping, so the stop may pass
    the nominal edge by up to one step before it comes back.

    Stop lists that are not animated (see AnimationState.animated) are left
    untouched. With step_size <= edge_stop the middle stop stays inside the
    outer stops.
    """
    if not state.animated:
        return

    target = state.stops[1]

    if state.forwards:
        if target.position + edge_stop >= 1:
            state.forwards = False
    else:
        if target.position - edge_stop <= 0:
            state.forwards = True

    step = step_size if state.forwards else -step_size
    state.stops[1] = replace(target, position=target.position + step)
