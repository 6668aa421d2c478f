# flappy/game/player.py
from __future__ import annotations
from dataclasses import dataclass, field

from .animation import Animator
from .config import (
    PLAYER_X, PLAYER_Y, PLAYER_W, PLAYER_H,
    GRAVITY, JUMP_VELOCITY, JUMP_ROTATION, ROTATION_ACCEL, MAX_ROTATION,
    ANIM_FRAMES, ANIM_SPEED, ANIM_PING_PONG,
)
from .geometry import Box, Pose


def _default_animator() -> Animator:
    return Animator(ANIM_FRAMES, ANIM_SPEED, ping_pong=ANIM_PING_PONG)


@dataclass
class Bird:
    """
    The falling player:
    - vy is integrated before y (semi-implicit Euler)
    - rotation only eases nose-down while falling (vy >= 0) and stays <= MAX_ROTATION
    """
    x: float = PLAYER_X
    y: float = PLAYER_Y
    vy: float = 0.0
    rotation: float = 0.0       # degrees, positive = nose down
    rotation_vy: float = 0.0    # deg/s
    w: int = PLAYER_W
    h: int = PLAYER_H
    animator: Animator = field(default_factory=_default_animator)

    gravity: float = GRAVITY
    jump_velocity: float = JUMP_VELOCITY
    jump_rotation: float = JUMP_ROTATION
    rotation_accel: float = ROTATION_ACCEL

    @property
    def box(self) -> Box:
        return Box(self.x, self.y, self.w, self.h)

    def update(self, dt: float):
        self.vy += self.gravity * dt
        self.rotation_vy += self.rotation_accel * dt
        self.y += self.vy * dt

        if self.vy >= 0.0 and self.rotation < MAX_ROTATION:
            self.rotation = min(MAX_ROTATION, self.rotation + self.rotation_vy * dt)

        self.animator.advance(dt)

    def jump(self):
        self.vy = self.jump_velocity
        self.rotation = self.jump_rotation
        self.rotation_vy = 0.0

    def pose(self) -> Pose:
        return Pose("bird", self.x, self.y, self.w, self.h,
                    rotation=self.rotation, frame=self.animator.current_frame())
