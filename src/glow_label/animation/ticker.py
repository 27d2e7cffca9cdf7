"""
Fixed-rate ticker thread.

Calls a callback every `period` seconds until stopped.
"""

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class PeriodicTicker:
    """
    Dedicated thread invoking a callback at a fixed rate.

    Once stop() returns, the callback is never invoked again.
    """

    def __init__(
        self,
        callback: Callable[[], object],
        period: float,
        name: str = "glow-ticker",
    ):
        if period <= 0:
            raise ValueError(f"Tick period must be positive, got {period}")

        self.callback = callback
        self.period = period
        self.name = name

        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._tick_count = 0

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def tick_count(self) -> int:
        """Number of completed callback invocations."""
        return self._tick_count

    def start(self) -> None:
        """Start ticking in a background thread."""
        if self._thread is not None:
            raise RuntimeError(f"Ticker {self.name} already started")

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name=self.name)
        self._thread.start()
        logger.debug("Ticker %s started (period %.3fs)", self.name, self.period)

    def stop(self, timeout: float | None = None) -> None:
        """Stop ticking and wait for the thread to finish. Safe to call twice."""
        self._stop_event.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug("Ticker %s stopped after %d ticks", self.name, self._tick_count)

    def _run(self) -> None:
        next_tick = time.monotonic()

        while not self._stop_event.is_set():
            try:
                self.callback()
            except Exception:
                logger.exception("Ticker %s callback failed", self.name)
            self._tick_count += 1

            # Precise timing: sleep only for what's left of this period
            next_tick += self.period
            sleep_time = next_tick - time.monotonic()
            if sleep_time > 0:
                self._stop_event.wait(sleep_time)
            else:
                logger.debug(
                    "Tick overrun: %.1fms behind (period %.1fms)",
                    -sleep_time * 1000, self.period * 1000,
                )
                next_tick = time.monotonic()
