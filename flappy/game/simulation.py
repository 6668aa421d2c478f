# flappy/game/simulation.py
from __future__ import annotations
from enum import Enum
from typing import List, Optional

from .background import Background
from .collision import collides
from .geometry import Pose
from .pipes import PipePool
from .player import Bird


class GameState(Enum):
    PLAYING = "playing"
    LOST = "lost"


class Command(Enum):
    JUMP = "jump"
    QUIT = "quit"


class Simulation:
    """
    Owns every entity and the PLAYING -> LOST flag.

    Tick order: bird, background, pipes, then one collision check per pair.
    The tick that detects a hit keeps its moves (entities are drawn in the
    colliding pose) and from then on nothing updates again.
    """
    def __init__(self,
                 seed: Optional[int] = None,
                 bird: Optional[Bird] = None,
                 pipes: Optional[PipePool] = None,
                 background: Optional[Background] = None):
        self.bird = bird if bird is not None else Bird()
        self.pipes = pipes if pipes is not None else PipePool(seed)
        self.background = background if background is not None else Background()
        self.state = GameState.PLAYING
        self.ticks = 0
        self.elapsed_s = 0.0

    @property
    def lost(self) -> bool:
        return self.state is GameState.LOST

    @property
    def seed(self) -> int:
        return self.pipes.seed

    def jump(self) -> bool:
        """Flap if still playing. Returns True if performed."""
        if self.lost:
            return False
        self.bird.jump()
        return True

    def apply(self, command: Command) -> bool:
        if command is Command.JUMP:
            return self.jump()
        return False

    def step(self, dt: float) -> GameState:
        if self.lost:
            return self.state

        self.bird.update(dt)
        self.background.update(dt)
        self.pipes.update(dt)

        box = self.bird.box
        hit = False
        for pair in self.pipes.pairs:
            if collides(box, pair):
                hit = True
        if hit:
            self.state = GameState.LOST

        self.ticks += 1
        self.elapsed_s += dt
        return self.state

    def poses(self) -> List[Pose]:
        """Back-to-front draw list."""
        return self.background.poses() + self.pipes.poses() + [self.bird.pose()]
