"""
Evaluation functions.

Plays the engine against random and against itself, and checks its choices
against the exact solver on all legal states.
"""

from typing import Callable, Dict, Iterable, List, Optional, Tuple

import numpy as np
from tqdm.auto import tqdm, trange

from .game import DRAW, EMPTY, O, X, Board, other
from .search import SearchEngine
from .solver import iter_all_legal_nonterminal_states, minimax_value_and_moves
from .symmetries import apply_symmetry_board, apply_symmetry_scores

Player = Callable[[Board, int], int]


def engine_player(engine: SearchEngine) -> Player:
    """Wrap an engine as a player callable."""
    def play(board: Board, mark: int) -> int:
        return engine.choose_move(board, mark, other(mark))
    return play


def random_player(rng) -> Player:
    """Player that picks uniformly among legal moves."""
    def play(board: Board, mark: int) -> int:
        moves = board.legal_moves()
        return moves[int(rng.integers(len(moves)))]
    return play


def play_game(x_player: Player, o_player: Player) -> int:
    """
    Play one game from the empty board.

    Returns:
        winner: X, O, or 0 for a draw
    """
    board = Board()
    mark = X
    while True:
        status = board.evaluate()
        if status.is_terminal:
            return EMPTY if status == DRAW else status.winner
        player = x_player if mark == X else o_player
        board.apply_move(player(board, mark), mark)
        mark = other(mark)


def eval_vs_random(
    engine: SearchEngine,
    games: int = 200,
    rng=None,
    progress: bool = True,
) -> Tuple[float, float, float]:
    """
    Evaluate engine vs random opponent, alternating sides.

    Returns:
        (win_rate, draw_rate, loss_rate)
    """
    rng = rng if rng is not None else np.random.default_rng()
    me = engine_player(engine)
    opponent = random_player(rng)
    wins = draws = losses = 0

    for g in trange(games, desc="vs random", disable=not progress):
        engine_side = X if g % 2 == 0 else O
        if engine_side == X:
            winner = play_game(me, opponent)
        else:
            winner = play_game(opponent, me)

        if winner == EMPTY:
            draws += 1
        elif winner == engine_side:
            wins += 1
        else:
            losses += 1

    total = wins + draws + losses
    if not total:
        return float("nan"), float("nan"), float("nan")
    return wins / total, draws / total, losses / total


def eval_self_play(
    engine: SearchEngine,
    games: int = 200,
    progress: bool = True,
) -> Dict[str, float]:
    """
    Evaluate engine vs itself.

    Returns:
        Dict with 'games', 'x_w', 'draw', 'o_w'
    """
    me = engine_player(engine)
    results = {X: 0, O: 0, EMPTY: 0}

    for _ in trange(games, desc="self-play", disable=not progress):
        results[play_game(me, me)] += 1

    total = sum(results.values())
    return {
        "games": total,
        "x_w": results[X] / total if total else float("nan"),
        "draw": results[EMPTY] / total if total else float("nan"),
        "o_w": results[O] / total if total else float("nan"),
    }


def _deterministic(engine: SearchEngine) -> SearchEngine:
    if engine.random_move_prob == 0:
        return engine
    return SearchEngine(random_move_prob=0.0)


def _states(min_marks: int) -> List[Tuple[List[int], int]]:
    return [
        (cells, player)
        for cells, player in iter_all_legal_nonterminal_states()
        if sum(1 for v in cells if v != EMPTY) >= min_marks
    ]


def eval_solver_agreement_all_states(
    engine: SearchEngine,
    min_marks: int = 0,
    progress: bool = True,
) -> Dict[str, object]:
    """
    Compare the engine's move with the exact solver on every legal state.

    The random-move policy is switched off for the comparison.

    Args:
        min_marks: only check states with at least this many marks placed

    Returns:
        Dict with metrics and disagreeing states (prefixed with '_')
    """
    det = _deterministic(engine)
    states = _states(min_marks)

    top1_opt = 0
    sign_ok = 0
    disagreements = []

    for cells, player in tqdm(states, desc="solver agreement", disable=not progress):
        result = det.search(Board(cells), player, other(player))
        value, best_moves = minimax_value_and_moves(cells, player)

        if result.index in best_moves:
            top1_opt += 1
        else:
            disagreements.append((cells, player, result.index))
        if int(np.sign(result.score)) == value:
            sign_ok += 1

    n = len(states)
    return {
        "solver_n_states": n,
        "solver_opt_top1_acc": top1_opt / n if n else float("nan"),
        "solver_sign_acc": sign_ok / n if n else float("nan"),
        "_disagreements": disagreements,
    }


def eval_symmetry_consistency(
    engine: SearchEngine,
    states: Optional[Iterable[Tuple[List[int], int]]] = None,
    progress: bool = True,
) -> Dict[str, object]:
    """
    Check that per-move scores follow the board under all 8 symmetries.

    Args:
        states: (cells, player) pairs; defaults to every legal state with
                at least 4 marks

    Returns:
        Dict with 'sym_n_states', 'sym_consistent' and '_inconsistent'
    """
    states = list(states) if states is not None else _states(4)
    consistent = 0
    inconsistent = []

    for cells, player in tqdm(states, desc="symmetry", disable=not progress):
        scores = engine.score_moves(Board(cells), player, other(player))
        ok = True
        for k in range(1, 8):
            t_cells = apply_symmetry_board(cells, k)
            t_scores = engine.score_moves(Board(t_cells), player, other(player))
            if t_scores != apply_symmetry_scores(scores, k):
                ok = False
                inconsistent.append((cells, player, k))
                break
        if ok:
            consistent += 1

    n = len(states)
    return {
        "sym_n_states": n,
        "sym_consistent": consistent / n if n else float("nan"),
        "_inconsistent": inconsistent,
    }
