from __future__ import annotations

import argparse
import logging
import random

import gymnasium as gym

import reverse_blockblast.env  # noqa: F401

logger = logging.getLogger("random_agent")


def run_random(steps: int = 200, seed: int | None = None) -> float:
    env = gym.make("ReverseBlockBlast-12x12-v0")
    rng = random.Random(seed)
    obs, info = env.reset(seed=seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        # Only pick among legal clicks and waiting
        valid = info.get("valid_actions", [])
        if valid:
            action = rng.choice(valid)
        else:
            action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            logger.info("episode %d finished with score %d", episodes, info["score"])
            obs, info = env.reset()
    env.close()
    return total_reward


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=200)
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")
    total_reward = run_random(args.steps, args.seed)
    logger.info("Random agent total reward: %.2f", total_reward)


if __name__ == "__main__":  # pragma: no cover
    main()
