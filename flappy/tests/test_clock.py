# flappy/tests/test_clock.py
"""
Clock checks with fake time sources (no real sleeping).

Usage (from repo root):
  python -m pytest flappy/tests/test_clock.py
"""
from __future__ import annotations
import pytest

from flappy.game.clock import ContinuousClock, DiscreteClock, FrameLimitedClock, make_clock


class FakeTime:
    def __init__(self, t: float = 100.0):
        self.t = t
        self.slept = []

    def now(self) -> float:
        return self.t

    def sleep(self, s: float):
        self.slept.append(s)
        self.t += s


def test_continuous_first_tick_is_zero():
    ft = FakeTime()
    clock = ContinuousClock(now=ft.now, max_dt=None)
    assert clock.tick() == 0.0


def test_continuous_measures_elapsed():
    ft = FakeTime()
    clock = ContinuousClock(now=ft.now, max_dt=None)
    clock.tick()
    ft.t += 0.25
    assert clock.tick() == pytest.approx(0.25)
    ft.t += 0.01
    assert clock.tick() == pytest.approx(0.01)


def test_continuous_never_negative_and_clamped():
    ft = FakeTime()
    clock = ContinuousClock(now=ft.now, max_dt=0.05)
    clock.tick()
    ft.t -= 1.0
    assert clock.tick() == 0.0
    ft.t += 3.0
    assert clock.tick() == 0.05


class FakeLimiter:
    """Stands in for pygame.time.Clock: tick(fps) returns queued milliseconds."""
    def __init__(self, ms):
        self.ms = list(ms)
        self.fps_seen = []

    def tick(self, fps: int) -> int:
        self.fps_seen.append(fps)
        return self.ms.pop(0)


def test_frame_limited_uses_limiter_measurement():
    limiter = FakeLimiter([250, 16, 20, 400])
    clock = FrameLimitedClock(limiter, fps=60, max_dt=0.05)
    assert clock.tick() == 0.0                    # first frame, whatever the limiter saw
    assert clock.tick() == pytest.approx(0.016)
    assert clock.tick() == pytest.approx(0.020)
    assert clock.tick() == 0.05                   # stall clamped
    assert limiter.fps_seen == [60, 60, 60, 60]   # measured once per frame, by the limiter


def test_discrete_fixed_step_and_frame_counter():
    ft = FakeTime()
    clock = DiscreteClock(fps=50, now=ft.now, sleep=ft.sleep)
    for i in range(1, 6):
        assert clock.tick() == pytest.approx(0.02)
        assert clock.frame == i


def test_discrete_sleeps_to_budget():
    ft = FakeTime()
    clock = DiscreteClock(fps=50, now=ft.now, sleep=ft.sleep)
    clock.tick()
    assert ft.slept == []
    ft.t += 0.005           # host work shorter than the 20 ms budget
    clock.tick()
    assert ft.slept == [pytest.approx(0.015)]
    ft.t += 0.05            # overran the budget -> no sleep
    clock.tick()
    assert len(ft.slept) == 1


def test_discrete_cadence_gate():
    ft = FakeTime()
    clock = DiscreteClock(fps=60, now=ft.now, sleep=ft.sleep)
    hits = []
    for _ in range(12):
        clock.tick()
        hits.append(clock.every(4))
    assert hits.count(True) == 3
    assert not clock.every(0)


def test_make_clock():
    assert isinstance(make_clock("continuous"), ContinuousClock)
    assert isinstance(make_clock("continuous", FakeLimiter([])), FrameLimitedClock)
    assert isinstance(make_clock("discrete"), DiscreteClock)
    assert isinstance(make_clock("discrete", FakeLimiter([])), DiscreteClock)
    with pytest.raises(ValueError):
        make_clock("warp")


def main():
    test_continuous_first_tick_is_zero()
    test_continuous_measures_elapsed()
    test_continuous_never_negative_and_clamped()
    test_frame_limited_uses_limiter_measurement()
    test_discrete_fixed_step_and_frame_counter()
    test_discrete_sleeps_to_budget()
    test_discrete_cadence_gate()
    test_make_clock()
    print("✓ clock checks passed")


if __name__ == "__main__":
    main()
