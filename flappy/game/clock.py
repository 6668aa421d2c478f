# flappy/game/clock.py
from __future__ import annotations
import time
from typing import Callable, Optional, Protocol

from .config import FPS, MAX_DT


class Clock(Protocol):
    def tick(self) -> float:  # seconds since the previous tick, >= 0
        ...


class ContinuousClock:
    """
    Real elapsed time between ticks.
    - first tick returns 0.0
    - max_dt (optional) clamps long stalls (window drag, breakpoints...)
    """
    def __init__(self,
                 now: Callable[[], float] = time.monotonic,
                 max_dt: Optional[float] = MAX_DT):
        self._now = now
        self._max_dt = max_dt
        self._last_t: Optional[float] = None

    def tick(self) -> float:
        t = self._now()
        if self._last_t is None:
            self._last_t = t
            return 0.0
        dt = max(0.0, t - self._last_t)
        self._last_t = t
        if self._max_dt is not None and dt > self._max_dt:
            dt = self._max_dt
        return dt


class FrameLimitedClock:
    """
    Continuous dt taken from a frame limiter's own measurement
    (pygame.time.Clock: tick(fps) caps the rate and returns elapsed ms).
    - first tick returns 0.0
    - max_dt clamps long stalls, like ContinuousClock
    """
    def __init__(self, limiter, fps: int = FPS, max_dt: Optional[float] = MAX_DT):
        self._limiter = limiter
        self._fps = fps
        self._max_dt = max_dt
        self._started = False

    def tick(self) -> float:
        dt = max(0.0, self._limiter.tick(self._fps) / 1000.0)
        if not self._started:
            self._started = True
            return 0.0
        if self._max_dt is not None and dt > self._max_dt:
            dt = self._max_dt
        return dt


class DiscreteClock:
    """
    Fixed-cadence clock: every tick is exactly one logical frame of 1/fps seconds.
    Sleeps whatever is left of the frame budget so the host runs at `fps`.
    """
    def __init__(self,
                 fps: int = FPS,
                 now: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        assert fps >= 1, "fps must be >= 1"
        self.fps = int(fps)
        self.frame = 0
        self._step = 1.0 / self.fps
        self._now = now
        self._sleep = sleep
        self._deadline: Optional[float] = None

    def tick(self) -> float:
        t = self._now()
        if self._deadline is not None:
            remaining = self._deadline - t
            if remaining > 0.0:
                self._sleep(remaining)
                t = self._deadline
        self._deadline = t + self._step
        self.frame += 1
        return self._step

    def every(self, n: int) -> bool:
        """True on frames that are a multiple of `n`. Hosts use it to run work every n-th frame."""
        return n > 0 and self.frame % n == 0


def make_clock(mode: str, limiter=None) -> Clock:
    """`limiter` (a pygame.time.Clock) becomes the continuous dt source when given."""
    if mode == "continuous":
        if limiter is not None:
            return FrameLimitedClock(limiter)
        return ContinuousClock()
    if mode == "discrete":
        return DiscreteClock()
    raise ValueError(f"Unknown timestep mode: {mode!r}")
