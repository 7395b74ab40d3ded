from __future__ import annotations

import itertools

import numpy as np
import pytest

from reverse_blockblast.game import CATALOG, GameGrid, InvalidPlacement, Shape, ShapeType


def test_catalog_has_ten_fixed_shapes():
    assert len(CATALOG) == 10
    sizes = {shape.kind: (shape.height, shape.width) for shape in CATALOG}
    assert sizes[ShapeType.SINGLE] == (1, 1)
    assert sizes[ShapeType.OCTO] == (1, 8)
    assert sizes[ShapeType.RECT] == (2, 4)
    assert sizes[ShapeType.L] == (3, 3)
    assert sizes[ShapeType.T] == (2, 3)
    assert sizes[ShapeType.VERTICAL_QUAD] == (4, 1)
    assert CATALOG[ShapeType.L].cell_count == 5
    assert CATALOG[ShapeType.T].cell_count == 4


def test_shape_masks_are_read_only():
    with pytest.raises(ValueError):
        CATALOG[ShapeType.SQUARE].mask[0, 0] = 0


def test_cells_at_skips_empty_mask_cells():
    cells = Shape(ShapeType.T).cells_at(2, 5)
    assert cells == [(2, 5), (2, 6), (2, 7), (3, 6)]


def test_can_place_respects_bounds():
    grid = GameGrid(12)
    octo = CATALOG[ShapeType.OCTO]
    assert grid.can_place(octo, 0, 4)
    assert not grid.can_place(octo, 0, 5)
    assert not grid.can_place(octo, -1, 0)
    assert not grid.can_place(octo, 12, 0)
    assert grid.can_place(CATALOG[ShapeType.VERTICAL_QUAD], 8, 11)
    assert not grid.can_place(CATALOG[ShapeType.VERTICAL_QUAD], 9, 11)


def test_can_place_ignores_cells_under_empty_mask_positions():
    grid = GameGrid(4)
    # L mask is empty at (0, 1); an occupied board cell there does not block it
    grid.grid[0, 1] = 1
    assert grid.can_place(CATALOG[ShapeType.L], 0, 0)
    grid.grid[2, 1] = 1
    assert not grid.can_place(CATALOG[ShapeType.L], 0, 0)


@pytest.mark.parametrize("shape", CATALOG, ids=lambda s: s.kind.name)
def test_can_place_matches_cellwise_definition_on_small_boards(shape):
    size = 3
    rng = np.random.default_rng(int(shape.kind))
    for _ in range(40):
        grid = GameGrid(size)
        grid.grid[:] = rng.integers(0, 2, size=(size, size))
        for row, col in itertools.product(range(-1, size + 1), repeat=2):
            expected = all(
                0 <= r < size and 0 <= c < size and grid.grid[r, c] == 0
                for r, c in shape.cells_at(row, col)
            ) and row >= 0 and col >= 0 and row + shape.height <= size and col + shape.width <= size
            assert grid.can_place(shape, row, col) == expected


def test_place_sets_mask_cells_and_counts_them():
    grid = GameGrid(12)
    placed = grid.place(CATALOG[ShapeType.L], 3, 4)
    assert placed == 5
    assert np.count_nonzero(grid.grid) == 5
    assert grid.grid[3, 4] == 1 and grid.grid[5, 6] == 1
    assert grid.grid[3, 5] == 0


def test_place_rejects_invalid_target():
    grid = GameGrid(12)
    grid.place(CATALOG[ShapeType.SQUARE], 0, 0)
    with pytest.raises(InvalidPlacement):
        grid.place(CATALOG[ShapeType.SINGLE], 1, 1)
    with pytest.raises(InvalidPlacement):
        grid.place(CATALOG[ShapeType.OCTO], 5, 6)


def test_detect_completed_rows_and_clear_cell():
    grid = GameGrid(12)
    assert grid.detect_completed_rows() == set()
    grid.grid[2, :] = 1
    grid.grid[7, :] = 1
    grid.grid[9, :11] = 1
    assert grid.detect_completed_rows() == {2, 7}
    grid.clear_cell(7, 3)
    assert grid.detect_completed_rows() == {2}
    assert not grid.is_occupied(7, 3)
    assert not grid.is_row_empty(7)
    assert grid.is_row_empty(0)


def test_copy_is_independent():
    grid = GameGrid(5)
    clone = grid.copy()
    clone.place(CATALOG[ShapeType.SINGLE], 0, 0)
    assert grid.grid[0, 0] == 0
    assert grid.get_filled_ratio() == 0.0
    assert clone.get_filled_ratio() == pytest.approx(1 / 25)
