from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    # Heuristic weight the placement policy gives each row a shape would complete
    row_completion_points: int = 100
    # Added to the player's score when a completed row has been emptied
    row_clear_score: int = 1

    def score_for_completed_rows(self, rows: int) -> int:
        if rows <= 0:
            return 0
        return rows * self.row_completion_points
