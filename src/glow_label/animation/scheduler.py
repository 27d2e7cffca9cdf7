"""
Animation scheduler.

Bridges the subject registry with the gradient renderer: every tick, each
active subject gets its current frame rendered and delivered, then its
animation state is advanced.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Hashable, Iterable, Protocol

from ..gradient.types import StopList
from ..text.colorizer import gradientize
from ..text.formatting import TextFormatting
from .state import AnimationState, advance, new_state

if TYPE_CHECKING:
    from ..config.schema import AnimationConfig
    from ..text.component import TextComponent

logger = logging.getLogger(__name__)


class Subject(Protocol):
    """Something that owns an animated label (e.g. a connected client)."""

    @property
    def key(self) -> Hashable: ...

    def label(self) -> str:
        """Current display label text."""
        ...

    def deliver(self, component: "TextComponent") -> None:
        """Display a rendered label. May raise if the subject can't take it."""
        ...


class SubjectRegistry(Protocol):
    """Source of the subjects that are active at the moment of a tick."""

    def active_subjects(self) -> Iterable[Subject]: ...


@dataclass(frozen=True)
class RenderResult:
    """Outcome of rendering one subject's frame during a tick."""
    key: Hashable
    ok: bool
    error: Exception | None = None


class AnimationScheduler:
    """
    Owns the animation state of every active subject.

    on_tick() is called by a periodic ticker; on_subject_departed() may be
    called from any thread. Both take the same lock, so a departure never
    interleaves with a tick in progress.

    Usage:
        scheduler = AnimationScheduler(registry, config.animation)
        ticker = PeriodicTicker(scheduler.on_tick, config.animation.period)
        ticker.start()
    """

    def __init__(
        self,
        registry: SubjectRegistry,
        config: "AnimationConfig | None" = None,
        formatting: Iterable[TextFormatting] = (),
    ):
        """
        Initialize the scheduler.

        Args:
            registry: Supplies the active subjects each tick
            config: Animation tuning (step size, edge margin, colors)
            formatting: Flags enabled on every rendered label
        """
        if config is None:
            from ..config.schema import AnimationConfig
            config = AnimationConfig()

        self.registry = registry
        self.config = config
        self.formatting = tuple(formatting)

        self._states: dict[Hashable, AnimationState] = {}
        self._lock = threading.Lock()

    def on_tick(self) -> list[RenderResult]:
        """
        Render and advance every active subject.

        A subject whose render fails is logged and skipped for this tick
        only; its animation state is kept.

        Returns:
            One RenderResult per subject processed
        """
        results = []
        with self._lock:
            for subject in self.registry.active_subjects():
                key = subject.key
                state = self._states.get(key)
                if state is None:
                    state = self._new_state()
                    self._states[key] = state

                # Always render the current frame before stepping
                result = self._render(key, subject, state)
                advance(state, self.config.step_size, self.config.edge_stop)

                if not result.ok:
                    logger.warning("Failed to render label for subject %r: %s", key, result.error)
                results.append(result)

        return results

    def on_subject_departed(self, key: Hashable) -> None:
        """Forget a subject's animation state immediately."""
        with self._lock:
            if self._states.pop(key, None) is not None:
                logger.debug("Subject %r departed, state removed", key)

    def set_stops(self, key: Hashable, stops: StopList) -> None:
        """
        Install a custom gradient for a subject.

        Three-stop gradients running from 0.0 to 1.0 keep bouncing their
        middle stop; any other shape renders statically.
        """
        with self._lock:
            state = self._states.get(key)
            if state is None:
                self._states[key] = AnimationState(stops=list(stops), forwards=True)
            else:
                state.stops = list(stops)

    def reset_stops(self, key: Hashable) -> None:
        """Restore the default animated gradient for a subject."""
        with self._lock:
            self._states[key] = self._new_state()

    def state_for(self, key: Hashable) -> AnimationState | None:
        """Get a copy of a subject's state (for inspection)."""
        with self._lock:
            state = self._states.get(key)
            if state is None:
                return None
            return AnimationState(stops=list(state.stops), forwards=state.forwards)

    def active_keys(self) -> list[Hashable]:
        with self._lock:
            return list(self._states.keys())

    def clear(self) -> None:
        """Drop all animation state (after the ticker has stopped)."""
        with self._lock:
            self._states.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._states)

    def _new_state(self) -> AnimationState:
        return new_state(self.config.center_rgb, self.config.around_rgb)

    def _render(self, key: Hashable, subject: Subject, state: AnimationState) -> RenderResult:
        """Render a subject's current frame and hand it over for display."""
        try:
            component = gradientize(subject.label(), state.stops, self.formatting)
            subject.deliver(component)
        except Exception as e:
            return RenderResult(key, ok=False, error=e)
        return RenderResult(key, ok=True)
