from __future__ import annotations

import gymnasium as gym
import numpy as np

import reverse_blockblast.env  # noqa: F401
from reverse_blockblast.env.clicker_env import ReverseBlockBlastEnv
from reverse_blockblast.env.wrappers import ResampleInvalidActionWrapper
from reverse_blockblast.game import GameConfig


def _complete_row_zero(env: ReverseBlockBlastEnv) -> None:
    env.game.grid.grid[0, :] = 1
    env.game.completed_rows.add(0)


def test_registered_env_resets_and_steps():
    env = gym.make("ReverseBlockBlast-12x12-v0")
    obs, info = env.reset(seed=3)
    assert obs["grid"].shape == (12, 12)
    assert obs["pieces"].shape == (3,)
    assert obs["cursor"] == 0
    assert info["valid_actions"] == [144]

    obs, reward, terminated, truncated, info = env.step(144)
    assert not terminated
    assert obs["grid"].sum() > 0
    assert obs["cursor"] == 1
    env.close()


def test_action_mask_allows_only_completed_row_cells_and_wait():
    env = ReverseBlockBlastEnv()
    env.reset(seed=0)
    _complete_row_zero(env)
    mask = env.get_action_mask()
    assert mask.shape == (145,)
    assert mask[:12].all()
    assert not mask[12:144].any()
    assert mask[144]


def test_clearing_rewards_and_score():
    env = ReverseBlockBlastEnv()
    env.reset(seed=0)
    _complete_row_zero(env)
    rewards = []
    for col in range(12):
        _, reward, terminated, _, info = env.step(col)
        rewards.append(reward)
        assert not terminated
    assert info["score"] == 1
    assert info["click_result"] == "row_cleared"
    assert rewards[-1] > rewards[0] > 0


def test_illegal_click_terminates_with_penalty():
    env = ReverseBlockBlastEnv()
    env.reset(seed=0)
    env.game.grid.grid[5, 5] = 1
    _, reward, terminated, _, info = env.step(5 * 12 + 5)
    assert terminated
    assert reward == env.terminal_penalty
    assert not info["action_mask"].any()


def test_no_op_click_is_penalised():
    env = ReverseBlockBlastEnv()
    env.reset(seed=0)
    _, reward, terminated, _, info = env.step(7)
    assert not terminated
    assert reward == env.invalid_action_penalty
    assert info["click_result"] == "no_op"


def test_episode_truncates_at_step_limit():
    env = ReverseBlockBlastEnv(GameConfig(max_episode_steps=2))
    env.reset(seed=0)
    _, _, _, truncated, _ = env.step(0)
    assert not truncated
    _, _, _, truncated, _ = env.step(0)
    assert truncated


def test_resample_wrapper_replaces_masked_actions():
    env = ResampleInvalidActionWrapper(ReverseBlockBlastEnv())
    env.reset(seed=0)
    obs, _, terminated, _, info = env.step(5)
    # Only waiting was legal, so a shape was placed instead of a no-op click
    assert not terminated
    assert info["click_result"] is None
    assert np.count_nonzero(obs["grid"]) > 0


def test_rgb_render_colours_completed_rows():
    env = ReverseBlockBlastEnv(render_mode="rgb_array")
    env.reset(seed=0)
    _complete_row_zero(env)
    img = env.render()
    assert img.shape == (144, 144, 3)
    assert tuple(img[0, 0]) == (70, 200, 120)
    assert tuple(img[20, 0]) == (30, 30, 36)
