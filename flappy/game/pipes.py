# flappy/game/pipes.py
from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional

from .config import (
    WIDTH, HEIGHT, PIPE_W, PIPE_H, PIPE_VELOCITY, PIPE_SPACING, PIPE_BOUNDS,
    POOL_SIZE, check_pipe_config,
)
from .geometry import Box, Pose


@dataclass
class PipePair:
    """
    One passable gap.
    - lower: top edge sits on the gap center, extends down past the floor
    - upper: bottom edge sits PIPE_SPACING above the gap center
    """
    lower: Box
    upper: Box

    @property
    def x(self) -> float:
        return self.lower.x

    @property
    def gap_top(self) -> float:
        return self.upper.bottom

    @property
    def gap_bottom(self) -> float:
        return self.lower.y

    def shift(self, dx: float):
        self.lower.x -= dx
        self.upper.x -= dx

    def place(self, x: float, gap_center: float, spacing: float = PIPE_SPACING):
        self.lower.x = x
        self.upper.x = x
        self.lower.y = gap_center
        self.upper.y = gap_center - spacing - self.upper.h

    def poses(self) -> List[Pose]:
        return [
            Pose("pipe_upper", self.upper.x, self.upper.y, self.upper.w, self.upper.h),
            Pose("pipe_lower", self.lower.x, self.lower.y, self.lower.w, self.lower.h),
        ]


class PipePool:
    """
    Fixed pool of POOL_SIZE pipe pairs scrolling left forever.
    A pair leaving the playfield on the left is recycled in place:
    moved back to the right edge with a freshly drawn gap center.
    """
    def __init__(self,
                 seed: Optional[int] = None,
                 width: int = WIDTH,
                 height: int = HEIGHT,
                 velocity: float = PIPE_VELOCITY,
                 spacing: float = PIPE_SPACING,
                 bounds: float = PIPE_BOUNDS,
                 pool_size: int = POOL_SIZE):
        check_pipe_config(height=height, bounds=bounds, spacing=spacing, pool_size=pool_size)
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self.width = width
        self.height = height
        self.velocity = velocity
        self.spacing = spacing
        self.bounds = bounds
        self.pool_size = pool_size
        self.recycles = 0
        self.pairs: List[PipePair] = []
        self._init_start()

    def _init_start(self):
        # Half a playfield apart, parked off-screen vertically until the first recycle
        for i in range(self.pool_size):
            x = PIPE_W + i * (self.width / 2)
            lower = Box(x, float(self.height), PIPE_W, PIPE_H)
            upper = Box(x, float(-PIPE_H), PIPE_W, PIPE_H)
            self.pairs.append(PipePair(lower=lower, upper=upper))

    @property
    def recycle_x(self) -> float:
        return -self.width / 2

    def random_gap_center(self) -> float:
        lo = float(self.bounds)
        hi = float(self.height - self.bounds)
        g = lo + self.rng.random() * (hi - lo)
        # float rounding can land exactly on hi
        return g if g < hi else lo

    def recycle(self, pair: PipePair):
        pair.place(float(self.width), self.random_gap_center(), self.spacing)
        self.recycles += 1

    def update(self, dt: float):
        dx = self.velocity * dt
        for pair in self.pairs:
            pair.shift(dx)
            if pair.lower.x < self.recycle_x:
                self.recycle(pair)

    def ahead_of(self, x: float) -> List[PipePair]:
        """Pairs whose right edge has not yet passed x, nearest first."""
        return sorted((p for p in self.pairs if p.lower.right >= x), key=lambda p: p.lower.x)

    def poses(self) -> List[Pose]:
        out: List[Pose] = []
        for pair in self.pairs:
            out.extend(pair.poses())
        return out

