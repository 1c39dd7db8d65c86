"""
Move selection for the computer player.

Minimax with alpha-beta pruning over the full game tree, scored from the
computer's perspective:
  - win:  10 - depth  (faster wins score higher)
  - loss: depth - 10  (slower losses score higher)
  - draw: 0

With probability `random_move_prob` the engine skips the search and plays a
uniformly random legal move instead, so the game is not a forced draw every
time.
"""

import math
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from .game import Board, won

WIN_SCORE = 10
DEFAULT_RANDOM_MOVE_PROB = 0.2


@dataclass
class SearchResult:
    """Chosen move and the score that justified it (None for random moves)."""
    index: int
    score: Optional[int]
    randomized: bool = False
    nodes: int = 0


class SearchEngine:
    """
    Alpha-beta engine with a bounded random-move policy.

    Args:
        random_move_prob: chance of playing a random legal move (0 disables)
        rng: randomness source exposing random() and integers(n);
             defaults to numpy.random.default_rng()
    """

    def __init__(self, random_move_prob: float = DEFAULT_RANDOM_MOVE_PROB, rng=None):
        self.random_move_prob = random_move_prob
        self.rng = rng if rng is not None else np.random.default_rng()
        self.nodes = 0

    def choose_move(self, board: Board, ai_mark: int, opponent_mark: int) -> int:
        """Return the index of an empty cell to play. The move is not applied."""
        return self.search(board, ai_mark, opponent_mark).index

    def search(self, board: Board, ai_mark: int, opponent_mark: int) -> SearchResult:
        if board.evaluate().is_terminal:
            raise ValueError(f"cannot search a finished game: {board!r}")

        self.nodes = 0
        moves = board.legal_moves()

        if self.rng.random() < self.random_move_prob:
            action = moves[int(self.rng.integers(len(moves)))]
            return SearchResult(index=action, score=None, randomized=True)

        best_score = -math.inf
        best_move = moves[0]
        for action, score in self.score_moves(board, ai_mark, opponent_mark).items():
            # Strictly greater: lowest index wins ties
            if score > best_score:
                best_score = score
                best_move = action

        return SearchResult(index=best_move, score=best_score, nodes=self.nodes)

    def score_moves(self, board: Board, ai_mark: int, opponent_mark: int) -> Dict[int, int]:
        """Exact minimax score of every legal move, keyed by cell index."""
        self.nodes = 0
        scores = {}
        for action in board.legal_moves():
            board.apply_move(action, ai_mark)
            scores[action] = self.minimax(board, 0, False, -math.inf, math.inf, ai_mark, opponent_mark)
            board.undo_move(action)
        return scores

    def minimax(
        self,
        board: Board,
        depth: int,
        maximizing: bool,
        alpha: float,
        beta: float,
        ai_mark: int,
        opponent_mark: int,
    ) -> int:
        """
        Score `board` for `ai_mark`.

        Args:
            depth: plies played since the root move
            maximizing: True when it is ai_mark's turn
            alpha, beta: current pruning window

        Returns:
            integer score in [-10, 10]
        """
        self.nodes += 1

        status = board.evaluate()
        if status == won(ai_mark):
            return WIN_SCORE - depth
        if status == won(opponent_mark):
            return depth - WIN_SCORE
        if status.is_terminal:
            return 0

        if maximizing:
            best = -math.inf
            for action in board.legal_moves():
                board.apply_move(action, ai_mark)
                value = self.minimax(board, depth + 1, False, alpha, beta, ai_mark, opponent_mark)
                board.undo_move(action)
                best = max(best, value)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break  # cutoff
            return best

        best = math.inf
        for action in board.legal_moves():
            board.apply_move(action, opponent_mark)
            value = self.minimax(board, depth + 1, True, alpha, beta, ai_mark, opponent_mark)
            board.undo_move(action)
            best = min(best, value)
            beta = min(beta, value)
            if beta <= alpha:
                break  # cutoff
        return best
