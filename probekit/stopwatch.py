"""A stopwatch that records elapsed durations on an experiment."""

from __future__ import annotations

import time
from typing import Any, Callable


class Stopwatch:
    """Measures elapsed time and records it on an experiment.

    The stopwatch starts when created.  It can be paused, resumed and reset;
    ``record`` stores the running time (minus paused time) as a duration in
    nanoseconds on the experiment.  A single stopwatch is not thread-safe.
    """

    def __init__(self, experiment: Any, clock: Callable[[], int] = time.monotonic_ns) -> None:
        self.experiment = experiment
        self._clock = clock
        self._started = clock()
        self._paused_at = 0
        self._paused_total = 0
        self._running = True

    def new_stopwatch(self) -> Stopwatch:
        """Return a fresh stopwatch for the same experiment."""
        return Stopwatch(self.experiment, self._clock)

    def record(self, name: str, *args: Any) -> Stopwatch:
        """Record the elapsed time under name, passing decorations through; does not reset."""
        if not self._running:
            raise RuntimeError(
                "stopwatch is not running - call Resume or Reset before calling Record"
            )
        duration = self._clock() - self._started - self._paused_total
        self.experiment.record_duration(name, duration, *args)
        return self

    def reset(self) -> Stopwatch:
        """Restart timing from now, unpausing if paused."""
        self._running = True
        self._started = self._clock()
        self._paused_total = 0
        return self

    def pause(self) -> Stopwatch:
        """Stop accumulating elapsed time until resumed."""
        if not self._running:
            raise RuntimeError(
                "stopwatch is not running - call Resume or Reset before calling Pause"
            )
        self._running = False
        self._paused_at = self._clock()
        return self

    def resume(self) -> Stopwatch:
        """Continue accumulating elapsed time after a pause."""
        if self._running:
            raise RuntimeError("stopwatch is running - call Pause before calling Resume")
        self._running = True
        self._paused_total += self._clock() - self._paused_at
        return self