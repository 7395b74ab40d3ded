from __future__ import annotations

from typing import Iterable, List, Optional

import pytest

from reverse_blockblast.game import (
    GameConfig,
    ManualScheduler,
    ReverseBlockBlastGame,
    ShapeType,
)


class SequenceRng:
    """Stands in for random.Random: `choice` returns catalog shapes in a fixed order."""

    def __init__(self, kinds: Iterable[ShapeType], fallback: ShapeType = ShapeType.SINGLE) -> None:
        self.kinds: List[ShapeType] = list(kinds)
        self.fallback = fallback

    def choice(self, seq):
        kind = self.kinds.pop(0) if self.kinds else self.fallback
        return seq[int(kind)]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_game(scheduler):
    def _make(kinds: Iterable[ShapeType] = (), fallback: ShapeType = ShapeType.SINGLE,
              config: Optional[GameConfig] = None) -> ReverseBlockBlastGame:
        return ReverseBlockBlastGame(config, scheduler=scheduler, rng=SequenceRng(kinds, fallback))

    return _make
