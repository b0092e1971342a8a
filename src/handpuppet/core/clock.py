"""Delta clock for frame timing."""

import time

from handpuppet.constants import MAX_DELTA_TIME


class DeltaClock:
    """Tracks elapsed time between frames."""

    def __init__(self):
        self._last_time = time.perf_counter()
        self._fps = 0.0

    def get_delta(self) -> float:
        """Return seconds elapsed since last call, clamped to MAX_DELTA_TIME."""
        now = time.perf_counter()
        dt = now - self._last_time
        self._last_time = now
        if dt > 0:
            # exponential moving average keeps the readout steady
            self._fps = 0.9 * self._fps + 0.1 * (1.0 / dt)
        return min(dt, MAX_DELTA_TIME)

    @property
    def fps(self) -> float:
        return self._fps

    def reset(self) -> None:
        self._last_time = time.perf_counter()
        self._fps = 0.0
