"""
Game and evaluation configuration.
"""

from dataclasses import dataclass
from typing import Optional

from .game import O, X
from .search import DEFAULT_RANDOM_MOVE_PROB


@dataclass
class GameConfig:
    """Play and evaluation configuration."""

    # Random seed (None: fresh entropy)
    seed: Optional[int] = None

    # Chance the computer plays a random legal move instead of searching
    random_move_prob: float = DEFAULT_RANDOM_MOVE_PROB

    # Pause before the computer replies (pacing only)
    ai_delay_ms: int = 200

    # Human plays X (moves first) or O
    human_mark: int = X

    # Evaluation
    eval_games: int = 200

    def __post_init__(self):
        if not 0.0 <= self.random_move_prob <= 1.0:
            raise ValueError(f"random_move_prob must be in [0, 1], got {self.random_move_prob}")
        if self.ai_delay_ms < 0:
            raise ValueError(f"ai_delay_ms must be >= 0, got {self.ai_delay_ms}")
        if self.human_mark not in (X, O):
            raise ValueError(f"human_mark must be X (+1) or O (-1), got {self.human_mark}")
        if self.eval_games < 1:
            raise ValueError(f"eval_games must be >= 1, got {self.eval_games}")
