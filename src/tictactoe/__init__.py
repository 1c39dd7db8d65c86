"""
TicTacToe with an alpha-beta computer opponent.

The computer searches the full game tree with minimax and alpha-beta pruning,
and occasionally plays a random legal move so it can be beaten.
"""

from .game import (
    EMPTY,
    X,
    O,
    SYMBOLS,
    WIN_LINES,
    Board,
    TerminalStatus,
    ONGOING,
    DRAW,
    won,
    other,
    winners_set,
    side_to_move,
    is_legal_board,
)
from .search import SearchEngine, SearchResult, WIN_SCORE, DEFAULT_RANDOM_MOVE_PROB
from .config import GameConfig
from .session import GameSession
from .solver import minimax_value_and_moves, iter_all_legal_nonterminal_states
from .symmetries import apply_symmetry_board, apply_symmetry_scores, SYM_MAPS
from .eval import (
    play_game,
    engine_player,
    random_player,
    eval_vs_random,
    eval_self_play,
    eval_solver_agreement_all_states,
    eval_symmetry_consistency,
)

__version__ = "0.1.0"
__all__ = [
    "EMPTY",
    "X",
    "O",
    "SYMBOLS",
    "WIN_LINES",
    "Board",
    "TerminalStatus",
    "ONGOING",
    "DRAW",
    "won",
    "other",
    "winners_set",
    "side_to_move",
    "is_legal_board",
    "SearchEngine",
    "SearchResult",
    "WIN_SCORE",
    "DEFAULT_RANDOM_MOVE_PROB",
    "GameConfig",
    "GameSession",
    "minimax_value_and_moves",
    "iter_all_legal_nonterminal_states",
    "apply_symmetry_board",
    "apply_symmetry_scores",
    "SYM_MAPS",
    "play_game",
    "engine_player",
    "random_player",
    "eval_vs_random",
    "eval_self_play",
    "eval_solver_agreement_all_states",
    "eval_symmetry_consistency",
]
