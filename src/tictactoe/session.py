"""
Turn dispatcher for a human vs computer game.

The front-end feeds human moves in through play_human() and asks for the
computer's reply with play_computer(); it reads state back with status(),
status_text() and current_mark. Illegal human moves are declined without
touching the board.
"""

from typing import Optional

import numpy as np

from .config import GameConfig
from .game import DRAW, SYMBOLS, X, Board, TerminalStatus, other
from .search import SearchEngine, SearchResult


class GameSession:
    """One running game plus restart."""

    def __init__(self, engine: Optional[SearchEngine] = None, config: Optional[GameConfig] = None):
        self.config = config or GameConfig()
        self.engine = engine or SearchEngine(
            random_move_prob=self.config.random_move_prob,
            rng=np.random.default_rng(self.config.seed),
        )
        self.human_mark = self.config.human_mark
        self.ai_mark = other(self.human_mark)
        self.board = Board()
        self.current_mark = X
        self.running = True

    @property
    def computer_to_move(self) -> bool:
        return self.running and self.current_mark == self.ai_mark

    def status(self) -> TerminalStatus:
        return self.board.evaluate()

    def status_text(self) -> str:
        status = self.status()
        if status == DRAW:
            return "Draw!"
        if status.is_terminal:
            return f"{SYMBOLS[status.winner]} wins!"
        return f"{SYMBOLS[self.current_mark]}'s turn"

    def play_human(self, index: int) -> bool:
        """Apply the human's move. Returns False (and changes nothing) if it is not legal now."""
        if not self.running or self.current_mark != self.human_mark:
            return False
        if not 0 <= index < 9 or not self.board.is_empty(index):
            return False
        self.board.apply_move(index, self.human_mark)
        self._after_move()
        return True

    def play_computer(self) -> Optional[SearchResult]:
        """Let the engine move if it is its turn in a running game."""
        if not self.computer_to_move:
            return None
        result = self.engine.search(self.board, self.ai_mark, self.human_mark)
        self.board.apply_move(result.index, self.ai_mark)
        self._after_move()
        return result

    def restart(self) -> None:
        self.board.reset()
        self.current_mark = X
        self.running = True

    def _after_move(self) -> None:
        if self.status().is_terminal:
            self.running = False
        else:
            self.current_mark = other(self.current_mark)
