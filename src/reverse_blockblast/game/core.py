from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, FrozenSet, List, Optional, Set, Tuple

import numpy as np

from .grid import GameGrid
from .policy import PlacementTarget, find_best_position
from .rules import ScoringRules
from .scheduler import ManualScheduler, ScheduledTask, Scheduler
from .shapes import CATALOG, Shape

logger = logging.getLogger(__name__)


class EngineStatus(Enum):
    IDLE = "idle"
    PLACING = "placing"  # a commit is scheduled, ticks are ignored
    GAME_OVER = "game_over"


class GameOverReason(Enum):
    NO_VALID_PLACEMENT = "no_valid_placement"
    ILLEGAL_MOVE = "illegal_move"


class ClickResult(Enum):
    IGNORED = "ignored"
    NO_OP = "no_op"
    CELL_CLEARED = "cell_cleared"
    ROW_CLEARED = "row_cleared"
    ILLEGAL = "illegal"


@dataclass
class GameConfig:
    grid_size: int = 12
    pieces_per_set: int = 3
    tick_interval_ms: int = 2000
    placement_delay_ms: int = 500
    random_seed: Optional[int] = None
    max_episode_steps: int = 5000

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError("grid_size must be at least 1")
        if self.pieces_per_set < 1:
            raise ValueError("pieces_per_set must be at least 1")
        if self.tick_interval_ms < 0 or self.placement_delay_ms < 0:
            raise ValueError("timer intervals must be non-negative")


class ShapeQueue:
    """The preview set of shapes and how many of them were already placed."""

    def __init__(self, size: int, rng: Any) -> None:
        self.size = size
        self.rng = rng
        self.shapes: List[Shape] = []
        self.cursor = 0
        self.refill()

    def refill(self) -> None:
        self.shapes = [self.rng.choice(CATALOG) for _ in range(self.size)]
        self.cursor = 0

    def current(self) -> Shape:
        return self.shapes[self.cursor]

    def advance(self) -> bool:
        """Consume the current shape; returns True when a new set was drawn."""
        self.cursor += 1
        assert 0 <= self.cursor <= self.size
        if self.cursor == self.size:
            self.refill()
            return True
        return False


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    grid: np.ndarray
    completed_rows: FrozenSet[int]
    score: int
    game_over: bool
    status: EngineStatus
    game_over_reason: Optional[GameOverReason]
    queue: Tuple[Shape, ...]
    cursor: int


Listener = Callable[[GameSnapshot], None]


class ReverseBlockBlastGame:
    """Turn engine and clearing rules for the auto-placing block puzzle.

    The host drives it: `tick()` from a periodic timer, `click_cell()` from the
    player, `reset()` to start over. Placements are committed through the
    scheduler after `placement_delay_ms`, so the host must also let the
    scheduler's time pass (see `ManualScheduler.advance`).
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 scheduler: Optional[Scheduler] = None, rng: Optional[Any] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.scheduler = scheduler or ManualScheduler()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.grid_size)
        self.queue = ShapeQueue(self.config.pieces_per_set, self.rng)
        self.completed_rows: Set[int] = set()
        self.score = 0
        self.status = EngineStatus.IDLE
        self.game_over_reason: Optional[GameOverReason] = None
        self.total_shapes_placed = 0
        self.total_rows_completed = 0
        self.total_cells_cleared = 0
        self.generation = 0
        self._pending: Optional[ScheduledTask] = None
        self._listeners: List[Listener] = []

    @property
    def game_over(self) -> bool:
        return self.status is EngineStatus.GAME_OVER

    # ---------- Observers ----------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.get_state()
        for listener in list(self._listeners):
            listener(snapshot)

    # ---------- Turn engine ----------
    def tick(self) -> bool:
        """Try to auto-place the next shape. Returns True if a commit was scheduled."""
        if self.status is not EngineStatus.IDLE:
            return False
        shape = self.queue.current()
        target = find_best_position(self.grid, shape, self.rules)
        if target is None:
            self._end_game(GameOverReason.NO_VALID_PLACEMENT)
            return False
        self.status = EngineStatus.PLACING
        generation = self.generation
        logger.debug("placing %s at (%d, %d)", shape.kind.name, target.row, target.col)
        self._pending = self.scheduler.call_later(
            self.config.placement_delay_ms,
            lambda: self._commit(generation, shape, target),
        )
        self._notify()
        return True

    def _commit(self, generation: int, shape: Shape, target: PlacementTarget) -> None:
        if generation != self.generation or self.status is not EngineStatus.PLACING:
            logger.debug("dropping stale placement of %s", shape.kind.name)
            return
        self._pending = None
        self.grid.place(shape, target.row, target.col)
        self.total_shapes_placed += 1
        new_rows = self.grid.detect_completed_rows() - self.completed_rows
        if new_rows:
            self.completed_rows |= new_rows
            self.total_rows_completed += len(new_rows)
            logger.debug("rows completed: %s", sorted(new_rows))
        if self.queue.advance():
            logger.debug("new shape set: %s", [s.kind.name for s in self.queue.shapes])
        self.status = EngineStatus.IDLE
        self._notify()

    def _end_game(self, reason: GameOverReason) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.status = EngineStatus.GAME_OVER
        self.game_over_reason = reason
        logger.info("game over (%s), final score %d", reason.value, self.score)
        self._notify()

    # ---------- Clearing ----------
    def click_cell(self, row: int, col: int) -> ClickResult:
        if self.game_over or not self.grid.is_inside(row, col):
            return ClickResult.IGNORED

        if row not in self.completed_rows:
            if self.grid.is_occupied(row, col):
                self._end_game(GameOverReason.ILLEGAL_MOVE)
                return ClickResult.ILLEGAL
            return ClickResult.NO_OP

        if not self.grid.is_occupied(row, col):
            return ClickResult.NO_OP

        self.grid.clear_cell(row, col)
        self.total_cells_cleared += 1
        result = ClickResult.CELL_CLEARED
        if self.grid.is_row_empty(row):
            self.completed_rows.discard(row)
            self.score += self.rules.row_clear_score
            result = ClickResult.ROW_CLEARED
            logger.debug("row %d cleared, score %d", row, self.score)
        self._notify()
        return result

    # ---------- Lifecycle ----------
    def reset(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.generation += 1
        self.grid.reset()
        self.queue.refill()
        self.completed_rows = set()
        self.score = 0
        self.status = EngineStatus.IDLE
        self.game_over_reason = None
        self.total_shapes_placed = 0
        self.total_rows_completed = 0
        self.total_cells_cleared = 0
        logger.info("game reset")
        self._notify()

    def get_state(self) -> GameSnapshot:
        grid = self.grid.clone_state()
        grid.flags.writeable = False
        return GameSnapshot(
            grid=grid,
            completed_rows=frozenset(self.completed_rows),
            score=self.score,
            game_over=self.game_over,
            status=self.status,
            game_over_reason=self.game_over_reason,
            queue=tuple(self.queue.shapes),
            cursor=self.queue.cursor,
        )

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "shapes_placed": self.total_shapes_placed,
            "rows_completed": self.total_rows_completed,
            "cells_cleared": self.total_cells_cleared,
            "final_fill_ratio": self.grid.get_filled_ratio(),
        }
