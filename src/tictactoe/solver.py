"""
Exact minimax solver for TicTacToe with caching.

No pruning and no depth scoring: values are +1 (win), 0 (draw), -1 (loss)
from the side to move, with every move that achieves the value. Serves as
the reference the alpha-beta engine is checked against.
"""

from typing import Dict, Iterator, List, Tuple

from .game import DRAW, EMPTY, O, X, Board, is_legal_board, other


# Cache: (board_tuple, player) -> (value, best_moves_tuple)
_MINIMAX_CACHE: Dict[Tuple[Tuple[int, ...], int], Tuple[int, Tuple[int, ...]]] = {}


def minimax_value_and_moves(cells: List[int], player: int) -> Tuple[int, List[int]]:
    """
    Compute minimax value and best moves from current state.

    Args:
        cells: Current board cells
        player: Side to move (X or O)

    Returns:
        (value, best_moves) where:
        - value: +1 (win), 0 (draw), -1 (loss) from player's perspective
        - best_moves: list of actions achieving optimal value
    """
    key = (tuple(cells), player)
    if key in _MINIMAX_CACHE:
        v, best = _MINIMAX_CACHE[key]
        return v, list(best)

    status = Board(cells).evaluate()
    if status.is_terminal:
        if status == DRAW:
            v = 0
        elif status.winner == player:
            v = +1
        else:
            v = -1
        _MINIMAX_CACHE[key] = (v, tuple())
        return v, []

    best_v = -2
    best_moves: List[int] = []

    for action, cell in enumerate(cells):
        if cell != EMPTY:
            continue
        next_cells = list(cells)
        next_cells[action] = player
        child_v, _ = minimax_value_and_moves(next_cells, other(player))
        v_here = -child_v  # Negate for opponent's perspective

        if v_here > best_v:
            best_v = v_here
            best_moves = [action]
        elif v_here == best_v:
            best_moves.append(action)

    _MINIMAX_CACHE[key] = (best_v, tuple(best_moves))
    return best_v, best_moves


def clear_cache():
    """Clear minimax cache (useful for memory management)."""
    _MINIMAX_CACHE.clear()


def cache_size() -> int:
    """Return current cache size."""
    return len(_MINIMAX_CACHE)


def iter_all_legal_nonterminal_states() -> Iterator[Tuple[List[int], int]]:
    """
    Iterate over all legal non-terminal board states.

    Yields:
        (cells, player) tuples for exhaustive evaluation.
    """
    for n in range(3**9):
        # Decode base-3 representation
        x = n
        cells = [EMPTY] * 9
        for i in range(9):
            digit = x % 3
            x //= 3
            if digit == 1:
                cells[i] = X
            elif digit == 2:
                cells[i] = O

        if not is_legal_board(cells):
            continue

        board = Board(cells)
        if board.evaluate().is_terminal:
            continue

        yield cells, board.side_to_move()
