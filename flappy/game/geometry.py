# flappy/game/geometry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple, Optional


@dataclass
class Box:
    """Float position, integer size. Screen coords: y grows downwards."""
    x: float
    y: float
    w: int
    h: int

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h


class Pose(NamedTuple):
    """What the renderer gets for one visual entity, once per tick."""
    kind: str                 # "background" | "pipe_upper" | "pipe_lower" | "bird"
    x: float
    y: float
    width: int
    height: int
    rotation: float = 0.0     # degrees, positive = nose down
    frame: Optional[str] = None
