from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Sequence, Tuple

import numpy as np


class ShapeType(IntEnum):
    SINGLE = 0
    DUO = 1
    TRIO = 2
    QUAD = 3
    OCTO = 4
    SQUARE = 5
    RECT = 6  # 2 rows x 4 columns
    L = 7
    T = 8
    VERTICAL_QUAD = 9


Mask = np.ndarray


def _frozen(rows: Sequence[Sequence[int]]) -> Mask:
    mask = np.array(rows, dtype=np.int8)
    mask.flags.writeable = False
    return mask


BASE_SHAPES = {
    ShapeType.SINGLE: _frozen([[1]]),
    ShapeType.DUO: _frozen([[1, 1]]),
    ShapeType.TRIO: _frozen([[1, 1, 1]]),
    ShapeType.QUAD: _frozen([[1, 1, 1, 1]]),
    ShapeType.OCTO: _frozen([[1, 1, 1, 1, 1, 1, 1, 1]]),
    ShapeType.SQUARE: _frozen([[1, 1], [1, 1]]),
    ShapeType.RECT: _frozen([[1, 1, 1, 1], [1, 1, 1, 1]]),
    ShapeType.L: _frozen([[1, 0, 0], [1, 0, 0], [1, 1, 1]]),
    ShapeType.T: _frozen([[1, 1, 1], [0, 1, 0]]),
    ShapeType.VERTICAL_QUAD: _frozen([[1], [1], [1], [1]]),
}


@dataclass(frozen=True)
class Shape:
    """A placeable piece: one of the catalog masks, never rotated."""

    kind: ShapeType

    @property
    def mask(self) -> Mask:
        return BASE_SHAPES[self.kind]

    @property
    def height(self) -> int:
        return int(self.mask.shape[0])

    @property
    def width(self) -> int:
        return int(self.mask.shape[1])

    @property
    def cell_count(self) -> int:
        return int(np.count_nonzero(self.mask))

    def cells_at(self, origin_row: int, origin_col: int) -> List[Tuple[int, int]]:
        cells: List[Tuple[int, int]] = []
        for dr in range(self.height):
            for dc in range(self.width):
                if self.mask[dr, dc]:
                    cells.append((origin_row + dr, origin_col + dc))
        return cells


# Indexable by ShapeType
CATALOG: Tuple[Shape, ...] = tuple(Shape(kind) for kind in ShapeType)
