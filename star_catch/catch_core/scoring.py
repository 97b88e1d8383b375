"""
Scoring
=======

Session high score, kept in memory only.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class HighScoreTracker:
    """
    Best final score of the current session.

    Nothing is written to disk; a new process starts at zero.
    """
    high_score: int = 0
    history: List[int] = field(default_factory=list)

    def record(self, final_score: int) -> bool:
        """
        Record a finished round.

        Returns:
            True if final_score set a new high score.
        """
        self.history.append(final_score)
        if final_score > self.high_score:
            self.high_score = final_score
            return True
        return False

    @property
    def rounds_played(self) -> int:
        return len(self.history)
