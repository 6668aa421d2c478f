# flappy/game/animation.py
from __future__ import annotations
from typing import Sequence


class Animator:
    """
    Frame cursor for one animated entity.

    ping_pong=True scans 0 -> N-1 -> 0 -> ... ; otherwise the cursor wraps to 0
    after passing N-1. `speed` is in frames per second, 0 freezes the cursor.
    """
    def __init__(self, frames: Sequence[str], speed: float, ping_pong: bool = True):
        assert len(frames) >= 1, "need at least one frame"
        self.frames = tuple(frames)
        self.speed = float(speed)
        self.ping_pong = ping_pong
        self.pos = 0.0
        self.direction = 1   # +1 forward, -1 backward

    @property
    def last(self) -> int:
        return len(self.frames) - 1

    def reset(self):
        self.pos = 0.0
        self.direction = 1

    def advance(self, dt: float):
        if self.speed == 0 or self.last == 0:
            return
        self.pos += self.direction * self.speed * dt

        if self.ping_pong:
            if self.pos >= self.last:
                self.pos = float(self.last)
                self.direction = -1
            elif self.pos <= 0.0:
                self.pos = 0.0
                self.direction = 1
        elif self.pos > self.last:
            self.pos = 0.0

    def current_index(self) -> int:
        i = int(self.pos + 0.5)
        return max(0, min(self.last, i))

    def current_frame(self) -> str:
        return self.frames[self.current_index()]
