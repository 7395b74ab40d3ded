from __future__ import annotations

import argparse
import logging
import os

import gymnasium as gym

# Ensure envs are registered
import reverse_blockblast.env  # noqa: F401
from reverse_blockblast.env.wrappers import ResampleInvalidActionWrapper

ENV_ID = "ReverseBlockBlast-12x12-v0"

logger = logging.getLogger("train_ppo")


def make_env(seed: int | None = None) -> gym.Env:
    env = gym.make(ENV_ID)
    # Resample invalid actions for vanilla PPO; also forwards get_action_mask
    env = ResampleInvalidActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="maskable")
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_reverse_blockblast.zip")
    p.add_argument("--n_envs", type=int, default=4)
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(message)s")

    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    if args.algo == "maskable":
        from sb3_contrib import MaskablePPO as Algo
        from sb3_contrib.common.wrappers import ActionMasker

        def mask_fn(env):
            return env.get_action_mask()

        def make_env_idx(i: int):
            def thunk():
                return ActionMasker(make_env(seed=i), mask_fn)
            return thunk
    else:
        from stable_baselines3 import PPO as Algo

        def make_env_idx(i: int):
            def thunk():
                return make_env(seed=i)
            return thunk

    vec_env = SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)])
    vec_env = VecMonitor(vec_env)
    model = Algo(
        policy="MultiInputPolicy",
        env=vec_env,
        verbose=1,
        tensorboard_log=args.logdir,
    )

    logger.info("training %s for %d timesteps", args.algo, args.timesteps)
    model.learn(total_timesteps=args.timesteps)
    save_dir = os.path.dirname(args.save_path)
    if save_dir:
        os.makedirs(save_dir, exist_ok=True)
    model.save(args.save_path)
    logger.info("saved model to %s", args.save_path)


if __name__ == "__main__":  # pragma: no cover
    main()
