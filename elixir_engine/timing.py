"""Frame timing: time steps, a frame timer and a frames-per-second counter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class Timestep:
    """A span of time measured in seconds."""

    time: float = 0.0

    @property
    def seconds(self) -> float:
        return self.time

    @property
    def milliseconds(self) -> float:
        return self.time * 1000.0

    def __float__(self) -> float:
        return self.time


class Timer:
    """Measures the total running time and the time between frames."""

    def __init__(
        self,
        initial_time: float | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._clock = clock
        start = clock() if initial_time is None else initial_time
        self._initial_time = start
        self._last_frame_time = start

    def total_time(self) -> Timestep:
        """Time elapsed since the timer started."""
        return Timestep(self._clock() - self._initial_time)

    def last_frame_time(self) -> Timestep:
        """Time elapsed since the previous call; starts a new frame."""
        now = self._clock()
        delta = now - self._last_frame_time
        self._last_frame_time = now
        return Timestep(delta)

    @property
    def initial_time(self) -> float:
        return self._initial_time


class FrameProfiler:
    """Counts frames and reports how many fit in each second."""

    def __init__(self) -> None:
        self._frame_count = 0
        self._elapsed_time = 0.0
        self._fps = 0

    def update(self, frame_time: Timestep | float) -> None:
        """Record one frame that took ``frame_time``."""
        self._elapsed_time += float(frame_time)
        self._frame_count += 1

        if self._elapsed_time >= 1.0:
            self._fps = self._frame_count
            self._frame_count = 0
            self._elapsed_time = 0.0

    @property
    def fps(self) -> int:
        return self._fps