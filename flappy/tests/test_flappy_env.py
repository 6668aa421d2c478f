# flappy/tests/test_flappy_env.py
"""
Quick tests for FlappyEnv (Gymnasium environment).

Usage (from repo root):
  python -m pytest flappy/tests/test_flappy_env.py
  python -m flappy.tests.test_flappy_env --render
  python -m flappy.tests.test_flappy_env --no-api-check --no-determinism
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Tuple

import numpy as np
from gymnasium.utils.env_checker import check_env

from flappy.env.flappy_env import FlappyEnv
from flappy.env.observations import OBS_SIZE, build_observation
from flappy.game.simulation import Simulation

SEED = 123
STEPS = 300
FRAME_SKIP = 4


def test_api_check(frame_skip: int = FRAME_SKIP) -> None:
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlappyEnv(frame_skip=frame_skip)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke(steps: int = STEPS, seed: int = SEED, frame_skip: int = FRAME_SKIP) -> None:
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlappyEnv(frame_skip=frame_skip)
    env.action_space.seed(seed)
    try:
        obs, info = env.reset(seed=seed)
        assert env.observation_space.contains(obs), "Initial observation not in space"
        assert info["seed"] == seed

        for t in range(steps):
            a = env.action_space.sample()
            obs, r, term, trunc, info = env.step(a)
            assert isinstance(r, float), "Reward must be a float"
            assert env.observation_space.contains(obs), f"Step {t}: observation out of bounds"
            if term or trunc:
                assert r == (-1.0 if term else 1.0)
                break
    finally:
        env.close()


def test_determinism(steps: int = STEPS, seed: int = SEED, frame_skip: int = FRAME_SKIP) -> None:
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlappyEnv(frame_skip=frame_skip)
        traj: List[Tuple[np.ndarray, float, bool, bool]] = []
        try:
            obs, _ = env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    # Fixed action sequence using a local RNG (not numpy global)
    rng = np.random.RandomState(42)
    action_seq = [int(rng.randint(0, 2)) for _ in range(steps)]

    t1 = rollout(seed, action_seq)
    t2 = rollout(seed, action_seq)

    assert len(t1) == len(t2), "Determinism: trajectory length mismatch"
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        if not np.allclose(o1, o2):
            raise AssertionError(f"Determinism: obs mismatch at step {i}")
        if not (r1 == r2 and te1 == te2 and tr1 == tr2):
            raise AssertionError(f"Determinism: transition mismatch at step {i}")


def test_noop_episode_terminates() -> None:
    """Never flapping must end the episode (pipe hit or fall out of the playfield)."""
    env = FlappyEnv(frame_skip=FRAME_SKIP)
    try:
        env.reset(seed=SEED)
        for _ in range(STEPS):
            _, r, term, trunc, info = env.step(0)
            if term:
                assert r == -1.0
                assert info["death_cause"] in ("pipe", "oob")
                break
        else:
            raise AssertionError("NOOP episode never terminated")
    finally:
        env.close()


def test_truncation_at_time_limit() -> None:
    env = FlappyEnv(frame_skip=1, time_limit_seconds=0.05)   # 3 decisions at 60 Hz
    try:
        env.reset(seed=SEED)
        flags = [env.step(0)[3] for _ in range(3)]
        assert flags == [False, False, True]
    finally:
        env.close()


def test_observation_layout() -> None:
    sim = Simulation(seed=SEED)
    obs = build_observation(sim)
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    assert 0.0 <= obs[0] <= 1.0, "y_top_norm out of range"
    assert obs[1] == 0.0 and obs[2] == 0.0, "bird starts at rest"
    # parked pipes: gap is the whole playfield
    assert obs[4] == 0.0 and obs[5] == 1.0
    # nearest pair first
    assert obs[3] <= obs[6]


def test_rgb_render() -> None:
    env = FlappyEnv(render_mode="rgb_array")
    try:
        env.reset(seed=SEED)
        frame = env.render()
        assert frame.shape[2] == 3 and frame.dtype == np.uint8
    finally:
        env.close()


def render_demo(steps: int, seed: int, frame_skip: int) -> None:
    """Open a window and run a short NOOP demo so you can visually verify behavior."""
    env = FlappyEnv(render_mode="human", frame_skip=frame_skip)
    try:
        env.reset(seed=seed)
        for _ in range(steps):
            _, _, term, trunc, _ = env.step(0)
            if term or trunc:
                break
    finally:
        env.close()
    print("✓ Render demo finished")


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--seed", type=int, default=SEED, help="Episode seed for tests")
    ap.add_argument("--steps", type=int, default=STEPS, help="Max decision steps per test")
    ap.add_argument("--frame-skip", type=int, default=FRAME_SKIP, help="Sim frames per decision step")
    ap.add_argument("--render", action="store_true", help="Run a short visual demo")
    ap.add_argument("--no-api-check", action="store_true", help="Skip Gym API compliance check")
    ap.add_argument("--no-smoke", action="store_true", help="Skip smoke test")
    ap.add_argument("--no-determinism", action="store_true", help="Skip determinism test")
    args = ap.parse_args()

    try:
        if not args.no_api_check:
            test_api_check(frame_skip=args.frame_skip)
            print("✓ API check ok")
        if not args.no_smoke:
            test_smoke(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Smoke test ok")
        if not args.no_determinism:
            test_determinism(steps=args.steps, seed=args.seed, frame_skip=args.frame_skip)
            print("✓ Determinism ok")
        if args.render:
            render_demo(steps=min(args.steps, 600), seed=args.seed, frame_skip=args.frame_skip)
    except AssertionError as e:
        print(f"✗ Test failed: {e}", file=sys.stderr)
        sys.exit(1)
    else:
        print("🎉 All selected tests passed")


if __name__ == "__main__":
    main()
