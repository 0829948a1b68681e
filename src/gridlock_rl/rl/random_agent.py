from __future__ import annotations

import argparse
import random
from typing import Optional

import gymnasium as gym

import gridlock_rl.env  # noqa: F401  ensure registration


def run_random(steps: int = 200, seed: Optional[int] = None, level: Optional[int] = None) -> dict:
    rng = random.Random(seed)
    env = gym.make("Gridlock-v0")
    options = {"level": level} if level is not None else None
    obs, info = env.reset(seed=seed, options=options)
    total_reward = 0.0
    episodes = 0
    solved = 0
    for _ in range(steps):
        # Prefer valid actions if available
        valid = info.get("valid_actions", [])
        if valid:
            action = rng.choice(valid)
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            solved += int(terminated)
            obs, info = env.reset(options=options)
    env.close()
    return {"total_reward": total_reward, "episodes": episodes, "solved": solved}


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--level", type=int, default=None)
    args = p.parse_args()
    stats = run_random(args.steps, args.seed, args.level)
    print(f"Random agent total reward: {stats['total_reward']:.2f} "
          f"({stats['solved']}/{stats['episodes']} episodes solved)")


if __name__ == "__main__":  # pragma: no cover
    main()
