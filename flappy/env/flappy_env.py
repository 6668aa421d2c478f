# flappy/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from flappy.game.config import WIDTH, HEIGHT, FPS, OOB_MARGIN
from flappy.game.render import draw_scene
from flappy.game.simulation import Simulation
from flappy.env.observations import build_observation, OBS_SIZE


class FlappyEnv(gym.Env):
    """
    Flappy Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal, fixed step).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (9,), float32, see build_observation.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Invalid render_mode {render_mode}"
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)

        # Internal sim timing
        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        # Optional built-in truncation (you can also use a TimeLimit wrapper)
        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)

        low = np.array([0.0, -1.0, -1.0] + [0.0, 0.0, 0.0] * ((OBS_SIZE - 3) // 3), dtype=np.float32)
        high = np.ones(OBS_SIZE, dtype=np.float32)
        self.observation_space = gym.spaces.Box(low=low, high=high, dtype=np.float32)

        # --- Runtime state ---
        self.sim: Optional[Simulation] = None
        self.alive: bool = True
        self.timestep: int = 0                   # number of *decision* steps elapsed
        self.current_seed: Optional[int] = None  # pipe pool's effective seed for this episode
        self.death_cause: Optional[str] = None   # "pipe" | "oob" | None

        # Rendering
        self.screen = None
        self.clock = None
        self.font = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)

        # Seeding policy:
        # - If a seed is provided, use it directly for the pipe pool for strict reproducibility.
        # - If not, let PipePool randomize internally (None).
        pipe_seed = int(seed) if seed is not None else None

        self.sim = Simulation(seed=pipe_seed)
        self.alive = True
        self.death_cause = None
        self.timestep = 0
        self.current_seed = self.sim.seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "elapsed_s": 0.0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.sim is not None, "Call reset() before step()"

        # Apply action once at the start of the decision step
        if action == 1 and self.alive:
            self.sim.jump()

        for _ in range(self.frame_skip):
            self.sim.step(self.dt)

            if self.sim.lost:
                self.alive = False
                self.death_cause = "pipe"
            elif self._out_of_bounds():
                self.alive = False
                self.death_cause = "oob"

            if not self.alive:
                break

        reward = 1.0 if self.alive else -1.0

        self.timestep += 1
        terminated = not self.alive
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "elapsed_s": self.sim.elapsed_s,
            "timestep": self.timestep,
            "seed": self.current_seed,
            "recycles": self.sim.pipes.recycles,
            "death_cause": self.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.sim is not None
        return build_observation(self.sim)

    def _out_of_bounds(self) -> bool:
        assert self.sim is not None
        b = self.sim.bird
        return (b.y + b.h < -OOB_MARGIN) or (b.y > HEIGHT + OOB_MARGIN)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.sim is None:
            return None

        if self.screen is None:
            pygame.init()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
                pygame.display.set_caption("Flappy - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface((WIDTH, HEIGHT))
            self.font = pygame.font.SysFont("jetbrainsmono", 14)

        hud = [f"t={self.timestep}  {'ALIVE' if self.alive else (self.death_cause or 'DEAD').upper()}"]
        draw_scene(self.screen, self.sim.poses(), dead=not self.alive, font=self.font, hud=hud)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata.get("render_fps", FPS))
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.font = None
