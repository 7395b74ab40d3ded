from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from reverse_blockblast.game import (
    CATALOG,
    ClickResult,
    GameConfig,
    ManualScheduler,
    ReverseBlockBlastGame,
    ScoringRules,
)


def _compute_action_mask(game: ReverseBlockBlastGame) -> np.ndarray:
    """Clicks on occupied cells of completed rows, plus the wait action."""
    size = game.grid.size
    mask = np.zeros((size * size + 1,), dtype=np.bool_)
    if game.game_over:
        return mask
    for row in game.completed_rows:
        occupied = np.flatnonzero(game.grid.grid[row, :])
        mask[row * size + occupied] = True
    mask[-1] = True
    return mask


class ReverseBlockBlastEnv(gym.Env):
    """The player's side of the game as a gymnasium environment.

    Actions 0..N*N-1 click cell (action // N, action % N). The last action
    waits: the engine ticks and the placement delay elapses, so the next shape
    lands before the agent acts again.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 4}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = -5.0) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.scheduler = ManualScheduler()
        self.game = ReverseBlockBlastGame(self.config, rules, scheduler=self.scheduler)
        self.render_mode = render_mode

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "cell": 0.05,  # per cell cleared from a completed row
            "row": 1.0,    # per completed row emptied
            "shape": 0.01,  # per shape survived
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.config.grid_size
        k = self.config.pieces_per_set
        self.wait_action = size * size

        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "completed_rows": spaces.MultiBinary(size),
                "pieces": spaces.Box(low=0, high=len(CATALOG) - 1, shape=(k,), dtype=np.int8),
                "cursor": spaces.Discrete(k + 1),
            }
        )
        self.action_space = spaces.Discrete(size * size + 1)

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.get_state()
        size = self.config.grid_size
        completed = np.zeros((size,), dtype=np.int8)
        for row in state.completed_rows:
            completed[row] = 1
        pieces = np.array([int(shape.kind) for shape in state.queue], dtype=np.int8)
        return {
            "grid": state.grid.astype(np.int8),
            "completed_rows": completed,
            "pieces": pieces,
            "cursor": state.cursor,
        }

    def _valid_actions(self, mask: np.ndarray) -> List[int]:
        return [int(a) for a in np.flatnonzero(mask)]

    def _get_info(self) -> Dict[str, Any]:
        mask = _compute_action_mask(self.game)
        return {
            "action_mask": mask,
            "valid_actions": self._valid_actions(mask),
            "score": self.game.score,
            "steps": self._steps,
            "status": self.game.status.value,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.rng.seed(seed)
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def _wait(self) -> int:
        """Tick and let the placement land; returns shapes placed."""
        before = self.game.total_shapes_placed
        if self.game.tick():
            self.scheduler.advance(self.config.placement_delay_ms)
        return self.game.total_shapes_placed - before

    def step(self, action: int):
        action = int(action)
        size = self.config.grid_size
        reward_components: Dict[str, float] = {"step": self.step_penalty}
        result: Optional[ClickResult] = None

        if action == self.wait_action:
            placed = self._wait()
            reward_components["shape"] = self.reward_weights["shape"] * float(placed)
        else:
            row, col = divmod(action, size)
            result = self.game.click_cell(row, col)
            if result is ClickResult.CELL_CLEARED:
                reward_components["cell"] = self.reward_weights["cell"]
            elif result is ClickResult.ROW_CLEARED:
                reward_components["cell"] = self.reward_weights["cell"]
                reward_components["row"] = self.reward_weights["row"]
            elif result in (ClickResult.NO_OP, ClickResult.IGNORED):
                reward_components["invalid"] = self.invalid_action_penalty

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.config.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["click_result"] = result.value if result is not None else None
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            grid = self.game.grid.grid
            cell = 12
            h, w = grid.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    if not grid[y, x]:
                        color = (30, 30, 36)
                    elif y in self.game.completed_rows:
                        color = (70, 200, 120)
                    else:
                        color = (60, 130, 240)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
