# flappy/game/background.py
from __future__ import annotations
from typing import List

from .config import WIDTH, HEIGHT, BG_VELOCITY
from .geometry import Box, Pose


class Background:
    """Two playfield-sized tiles drifting left, each wraps back to the right edge."""
    def __init__(self, width: int = WIDTH, height: int = HEIGHT, velocity: float = BG_VELOCITY):
        self.width = width
        self.velocity = velocity
        self.tiles = [Box(0.0, 0.0, width, height), Box(float(width), 0.0, width, height)]

    def update(self, dt: float):
        dx = self.velocity * dt
        for t in self.tiles:
            t.x -= dx
            if t.x < -t.w:
                t.x = self.width - 1

    def poses(self) -> List[Pose]:
        return [Pose("background", t.x, t.y, t.w, t.h) for t in self.tiles]
