# flappy/env/observations.py
from __future__ import annotations
from typing import List
import numpy as np

from flappy.game.config import (
    WIDTH, HEIGHT, PLAYER_H, MAX_ROTATION, OBS_MAX_VY, OBS_PIPES_AHEAD
)

OBS_SIZE = 3 + 3 * OBS_PIPES_AHEAD

def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)

def _norm_top_y(y_top: float) -> float:
    """Normalize a top coordinate into [0,1] using [0, HEIGHT-PLAYER_H]."""
    denom = max(1, HEIGHT - PLAYER_H)
    return _clamp01(y_top / denom)

def _norm_signed(v: float, v_max: float) -> float:
    v_max = float(max(1.0, v_max))
    return max(-1.0, min(1.0, v / v_max))

def build_observation(sim) -> np.ndarray:
    """
    Returns a fixed (9,) float32 vector:
      [ y_top_norm, vy_norm, rot_norm,
        dx1, gap_top1, gap_bot1,
        dx2, gap_top2, gap_bot2 ]
    - y_top_norm in [0,1]; vy_norm, rot_norm in [-1,1]
    - dx: distance from the bird's left edge to the pair's right edge, / WIDTH
    - gap_top / gap_bot: gap edges in screen space, / HEIGHT
    - sentinel for a missing pair: dx=1, gap_top=0, gap_bot=1 (wide open)
    """
    bird = sim.bird
    feats: List[float] = [
        _norm_top_y(float(bird.y)),
        _norm_signed(float(bird.vy), OBS_MAX_VY),
        _norm_signed(float(bird.rotation), MAX_ROTATION),
    ]

    ahead = sim.pipes.ahead_of(bird.x)[:OBS_PIPES_AHEAD]
    for i in range(OBS_PIPES_AHEAD):
        if i < len(ahead):
            pair = ahead[i]
            feats.extend([
                _clamp01((pair.lower.right - bird.x) / float(WIDTH)),
                _clamp01(pair.gap_top / float(HEIGHT)),
                _clamp01(pair.gap_bottom / float(HEIGHT)),
            ])
        else:
            feats.extend([1.0, 0.0, 1.0])

    return np.asarray(feats, dtype=np.float32)
