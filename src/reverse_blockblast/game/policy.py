"""Automatic placement policy.

A one-ply greedy search: every valid origin is tried on a scratch copy of the
board and rewarded only for the rows it would complete right away. Columns,
combinations with later shapes and board shape are deliberately ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .grid import GameGrid
from .rules import ScoringRules
from .shapes import Shape


@dataclass(frozen=True)
class PlacementTarget:
    row: int
    col: int


def get_valid_placements(grid: GameGrid, shape: Shape) -> List[PlacementTarget]:
    """All origins where `shape` fits, row ascending then col ascending."""
    valid_positions: List[PlacementTarget] = []
    for row in range(grid.size - shape.height + 1):
        for col in range(grid.size - shape.width + 1):
            if grid.can_place(shape, row, col):
                valid_positions.append(PlacementTarget(row, col))
    return valid_positions


def score_placement(grid: GameGrid, shape: Shape, target: PlacementTarget,
                    rules: Optional[ScoringRules] = None) -> int:
    rules = rules or ScoringRules()
    temp_grid = grid.copy()
    temp_grid.place(shape, target.row, target.col)
    completed = 0
    for row in range(target.row, target.row + shape.height):
        if temp_grid.grid[row, :].all():
            completed += 1
    return rules.score_for_completed_rows(completed)


def find_best_position(grid: GameGrid, shape: Shape,
                       rules: Optional[ScoringRules] = None) -> Optional[PlacementTarget]:
    """Pick where `shape` goes, or None when it fits nowhere.

    The first origin with the strictly highest score wins. When nothing
    completes a row, the first valid origin in row-major order is used.
    """
    best_score = 0
    best_position: Optional[PlacementTarget] = None
    first_valid: Optional[PlacementTarget] = None

    for target in get_valid_placements(grid, shape):
        if first_valid is None:
            first_valid = target
        score = score_placement(grid, shape, target, rules)
        if score > best_score:
            best_score = score
            best_position = target

    if best_position is None:
        return first_valid
    return best_position
