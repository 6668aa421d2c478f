# /experiments/sanity_rollout.py
"""
Baseline rollouts on FlappyEnv.

Plays a coin-flip policy and a gap-tracking policy over a range of pipe seeds,
appends one CSV row per episode and prints how long each policy survives.
The heuristic should clearly beat the coin flip; if it doesn't, the
observation or the physics constants changed under it.

  python -m experiments.sanity_rollout
  python -m experiments.sanity_rollout --policy heuristic --episodes 5 --seed-base 300
  python -m experiments.sanity_rollout --max-decisions 200 --csv /tmp/flappy_runs.csv
"""

from __future__ import annotations
import argparse
import csv
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, Dict, List, Optional

import numpy as np

from flappy.env.flappy_env import FlappyEnv
from flappy.game.config import PLAYER_H, HEIGHT

Policy = Callable[[np.ndarray], int]

POLICIES = ("random", "heuristic")


def coin_flip(seed: int, flap_prob: float = 0.12) -> Policy:
    rng = np.random.default_rng(seed)
    return lambda _obs: int(rng.random() < flap_prob)


def gap_tracker(margin: float = 0.04) -> Policy:
    """Flap whenever the bird's bottom edge sinks to within `margin` of the next gap floor."""
    bird_h = PLAYER_H / float(HEIGHT)

    def act(obs: np.ndarray) -> int:
        y, vy, gap_floor = obs[0], obs[1], obs[5]
        if vy < -0.1:
            return 0
        return int(y + bird_h > gap_floor - margin)
    return act


def make_policy(name: str, seed: int) -> Policy:
    if name == "random":
        return coin_flip(seed)
    if name == "heuristic":
        return gap_tracker()
    raise ValueError(f"Unknown policy: {name}")


@dataclass
class Episode:
    policy: str
    seed: int
    frame_skip: int
    sim_fps: int
    decisions: int
    flaps: int
    total_reward: float
    elapsed_s: float
    recycles: int
    outcome: str            # "pipe" | "oob" | "time_limit" | "cap"


def run_one_episode(policy_name: str,
                    seed: int,
                    frame_skip: int = 4,
                    max_decisions: int = 10_000,
                    time_limit_seconds: Optional[float] = 30.0) -> Episode:
    env = FlappyEnv(frame_skip=frame_skip, time_limit_seconds=time_limit_seconds)
    policy = make_policy(policy_name, seed)
    decisions = flaps = 0
    total = 0.0
    outcome = "cap"
    try:
        obs, info = env.reset(seed=seed)
        while decisions < max_decisions:
            action = policy(obs)
            obs, reward, terminated, truncated, info = env.step(action)
            decisions += 1
            flaps += action
            total += reward
            if terminated:
                outcome = info["death_cause"]
                break
            if truncated:
                outcome = "time_limit"
                break
    finally:
        env.close()

    return Episode(policy=policy_name, seed=seed, frame_skip=frame_skip, sim_fps=env.sim_fps,
                   decisions=decisions, flaps=flaps, total_reward=total,
                   elapsed_s=round(float(info["elapsed_s"]), 3),
                   recycles=int(info.get("recycles", 0)), outcome=outcome)


def append_csv(path: Path, episodes: List[Episode]):
    """Append episode rows; the header is written only when the file is new."""
    path.parent.mkdir(parents=True, exist_ok=True)
    new_file = not path.exists()
    with path.open("a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=[fl.name for fl in fields(Episode)])
        if new_file:
            w.writeheader()
        w.writerows(asdict(ep) for ep in episodes)


def summarize(episodes: List[Episode]) -> Dict[str, Dict[str, float]]:
    """Per-policy mean/median survival time and pipes passed."""
    out: Dict[str, Dict[str, float]] = {}
    for name in sorted({ep.policy for ep in episodes}):
        mine = [ep for ep in episodes if ep.policy == name]
        t = np.array([ep.elapsed_s for ep in mine])
        out[name] = {
            "episodes": len(mine),
            "mean_s": float(t.mean()),
            "median_s": float(np.median(t)),
            "mean_recycles": float(np.mean([ep.recycles for ep in mine])),
        }
    return out


def main():
    ap = argparse.ArgumentParser(description="Baseline rollouts on FlappyEnv")
    ap.add_argument("--policy", choices=POLICIES + ("all",), default="all")
    ap.add_argument("--episodes", type=int, default=20, help="Episodes per policy")
    ap.add_argument("--seed-base", type=int, default=101,
                    help="Pipe seeds are seed-base, seed-base+1, ...")
    ap.add_argument("--frame-skip", type=int, default=4)
    ap.add_argument("--max-decisions", type=int, default=10_000)
    ap.add_argument("--csv", type=Path, default=Path("experiments/runs/episodes.csv"))
    args = ap.parse_args()

    names = POLICIES if args.policy == "all" else (args.policy,)
    seeds = range(args.seed_base, args.seed_base + args.episodes)

    episodes: List[Episode] = []
    for name in names:
        for seed in seeds:
            ep = run_one_episode(name, seed, args.frame_skip, args.max_decisions)
            episodes.append(ep)
            print(f"{name:>9} seed={seed:<5} {ep.elapsed_s:6.2f}s  pipes={ep.recycles:<3} "
                  f"flaps={ep.flaps:<4} {ep.outcome}")

    append_csv(args.csv, episodes)
    for name, s in summarize(episodes).items():
        print(f"{name}: mean {s['mean_s']:.2f}s, median {s['median_s']:.2f}s, "
              f"{s['mean_recycles']:.1f} pipes over {s['episodes']} episodes")
    print(f"✓ rows appended to {args.csv}")


if __name__ == "__main__":
    main()
