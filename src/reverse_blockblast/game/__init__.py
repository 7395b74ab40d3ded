"""Game module for Reverse Block Blast.

Exports the core game engine and supporting classes:
- Shape / ShapeType / CATALOG: the fixed set of placeable shapes
- GameGrid: Occupancy grid, placement checks and completed-row detection
- find_best_position: Greedy automatic placement policy
- ScoringRules: Scoring constants used by the policy and the clearing rules
- ManualScheduler: Host-driven delayed task runner for placement commits
- ReverseBlockBlastGame: Turn engine, clearing interaction and game state
"""

from .shapes import CATALOG, Shape, ShapeType
from .grid import GameGrid, InvalidPlacement
from .policy import PlacementTarget, find_best_position, get_valid_placements
from .rules import ScoringRules
from .scheduler import ManualScheduler, ScheduledTask, Scheduler
from .core import (
    ClickResult,
    EngineStatus,
    GameConfig,
    GameOverReason,
    GameSnapshot,
    ReverseBlockBlastGame,
    ShapeQueue,
)

__all__ = [
    "CATALOG",
    "Shape",
    "ShapeType",
    "GameGrid",
    "InvalidPlacement",
    "PlacementTarget",
    "find_best_position",
    "get_valid_placements",
    "ScoringRules",
    "ManualScheduler",
    "ScheduledTask",
    "Scheduler",
    "ClickResult",
    "EngineStatus",
    "GameConfig",
    "GameOverReason",
    "GameSnapshot",
    "ReverseBlockBlastGame",
    "ShapeQueue",
]
