# flappy/game/collision.py
from __future__ import annotations

from .geometry import Box
from .pipes import PipePair


def collides(bird: Box, pair: PipePair) -> bool:
    """
    Strict AABB test of the bird against one pipe pair:
    inside the pipe column horizontally AND outside the gap vertically.
    No sweep between ticks, a fast enough bird can tunnel through.
    """
    overlap_x = bird.x + bird.w > pair.lower.x and bird.x < pair.lower.x + pair.lower.w
    outside_gap = bird.y < pair.upper.y + pair.upper.h or bird.y + bird.h > pair.lower.y
    return overlap_x and outside_gap
