from __future__ import annotations

from typing import Set

import numpy as np

from .shapes import Shape


class InvalidPlacement(RuntimeError):
    """Raised when a shape is committed to a target `can_place` rejects."""


class GameGrid:
    """Square occupancy grid for the auto-placed shapes.

    Cells hold 0 (empty) or 1 (occupied). Rows are indexed top to bottom, and
    every position is given as (row, col).
    """

    def __init__(self, size: int = 12) -> None:
        self.size = int(size)
        self.grid = np.zeros((self.size, self.size), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_occupied(self, row: int, col: int) -> bool:
        return bool(self.grid[row, col])

    def is_row_empty(self, row: int) -> bool:
        return not np.any(self.grid[row, :])

    def can_place(self, shape: Shape, row: int, col: int) -> bool:
        """Check the mask anchored at (row, col) fits and overlaps nothing."""
        h, w = shape.mask.shape
        if row < 0 or col < 0:
            return False
        if row + h > self.size or col + w > self.size:
            return False
        window = self.grid[row : row + h, col : col + w]
        return not np.any((window != 0) & (shape.mask != 0))

    def place(self, shape: Shape, row: int, col: int) -> int:
        """Occupy every filled mask cell and return how many were placed."""
        if not self.can_place(shape, row, col):
            raise InvalidPlacement(f"{shape.kind.name} does not fit at ({row}, {col})")
        h, w = shape.mask.shape
        window = self.grid[row : row + h, col : col + w]
        filled = shape.mask != 0
        window[filled] = 1
        return int(np.count_nonzero(filled))

    def detect_completed_rows(self) -> Set[int]:
        full_rows = np.flatnonzero(np.all(self.grid != 0, axis=1))
        return {int(r) for r in full_rows}

    def clear_cell(self, row: int, col: int) -> None:
        self.grid[row, col] = 0

    def get_filled_ratio(self) -> float:
        return float(np.count_nonzero(self.grid)) / float(self.size * self.size)

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.size)
        new_grid.grid = self.grid.copy()
        return new_grid

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
