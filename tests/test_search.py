"""Tests for the alpha-beta search engine."""

import math

import numpy as np
import pytest

from tictactoe.eval import engine_player, play_game
from tictactoe.game import EMPTY, O, X, Board, other, won
from tictactoe.search import WIN_SCORE, SearchEngine, SearchResult
from tictactoe.solver import iter_all_legal_nonterminal_states


class ScriptedRng:
    """Stands in for numpy's Generator with fixed draws."""

    def __init__(self, draws, picks=()):
        self.draws = list(draws)
        self.picks = list(picks)
        self.integer_calls = []

    def random(self):
        return self.draws.pop(0)

    def integers(self, n):
        self.integer_calls.append(n)
        return self.picks.pop(0)


def optimal_engine():
    return SearchEngine(random_move_prob=0.0)


def plain_minimax(board, depth, maximizing, ai_mark, opponent_mark):
    """Unpruned reference with the same depth scoring."""
    status = board.evaluate()
    if status == won(ai_mark):
        return WIN_SCORE - depth
    if status == won(opponent_mark):
        return depth - WIN_SCORE
    if status.is_terminal:
        return 0
    values = []
    for i in board.legal_moves():
        board.apply_move(i, ai_mark if maximizing else opponent_mark)
        values.append(plain_minimax(board, depth + 1, not maximizing, ai_mark, opponent_mark))
        board.undo_move(i)
    return max(values) if maximizing else min(values)


def count_full_tree(board, mark):
    """Nodes an unpruned search visits below each root move."""
    def count(b, m):
        if b.evaluate().is_terminal:
            return 1
        total = 1
        for i in b.legal_moves():
            b.apply_move(i, m)
            total += count(b, other(m))
            b.undo_move(i)
        return total

    total = 0
    for i in board.legal_moves():
        board.apply_move(i, mark)
        total += count(board, other(mark))
        board.undo_move(i)
    return total


def opponent_wins_next(board, opponent_mark):
    for i in board.legal_moves():
        board.apply_move(i, opponent_mark)
        done = board.evaluate() == won(opponent_mark)
        board.undo_move(i)
        if done:
            return True
    return False


class TestScenarios:
    def test_completes_own_row(self):
        board = Board.from_string("XX.OO....")
        result = optimal_engine().search(board, O, X)
        assert result.index == 5
        assert result.score == WIN_SCORE
        assert not result.randomized

    def test_never_hands_opponent_immediate_win(self):
        board = Board.from_string("XX.OO....")
        index = optimal_engine().choose_move(board, O, X)
        board.apply_move(index, O)
        assert board.evaluate() == won(O) or not opponent_wins_next(board, X)

    def test_blocks_when_it_cannot_win(self):
        board = Board.from_string("XX..O....")
        assert optimal_engine().choose_move(board, O, X) == 2

    def test_reply_to_center_keeps_draw(self):
        board = Board.from_string("....X....")
        result = optimal_engine().search(board, O, X)
        assert result.score >= 0
        assert result.index in (0, 2, 6, 8)
        # Corners all draw; lowest index wins the tie
        assert result.index == 0
        assert result.score == 0

    def test_edge_reply_to_center_loses(self):
        scores = optimal_engine().score_moves(Board.from_string("....X...."), O, X)
        assert all(scores[i] < 0 for i in (1, 3, 5, 7))
        assert all(scores[i] == 0 for i in (0, 2, 6, 8))


class TestDepthScoring:
    def test_prefers_faster_win(self):
        # X wins at once on 2; 6 (or 3) forks and wins two plies later
        board = Board.from_string("XX..O...O")
        engine = optimal_engine()
        scores = engine.score_moves(board, X, O)
        assert scores[2] == WIN_SCORE
        assert scores[6] == WIN_SCORE - 2
        assert scores[3] == WIN_SCORE - 2
        assert scores[2] > scores[6]
        assert engine.choose_move(board, X, O) == 2

    def test_terminal_scores(self):
        engine = optimal_engine()
        assert engine.minimax(Board.from_string("OOOXX.X.."), 3, True, -math.inf, math.inf, O, X) == 7
        assert engine.minimax(Board.from_string("XXXOO.O.."), 4, True, -math.inf, math.inf, O, X) == -6
        assert engine.minimax(Board.from_string("XOXXOOOXX"), 8, False, -math.inf, math.inf, O, X) == 0

    def test_prefers_slower_loss(self):
        # Blocking on 8 only delays the loss: X forks with 6 and wins on ply 3
        board = Board.from_string("XO..X....")
        engine = optimal_engine()
        scores = engine.score_moves(board, O, X)
        assert scores[8] == 3 - WIN_SCORE
        assert all(scores[i] == 1 - WIN_SCORE for i in scores if i != 8)
        assert engine.choose_move(board, O, X) == 8


class TestSearchInvariants:
    def test_choose_move_returns_empty_cell(self):
        engine = optimal_engine()
        for cells, player in iter_all_legal_nonterminal_states():
            if sum(1 for v in cells if v != EMPTY) < 4:
                continue
            board = Board(cells)
            assert board.is_empty(engine.choose_move(board, player, other(player)))

    def test_search_restores_board(self):
        board = Board.from_string("X...O..X.")
        before = board.copy()
        engine = optimal_engine()
        engine.search(board, O, X)
        engine.score_moves(board, O, X)
        assert board == before

    def test_deterministic_without_random_branch(self):
        board = Board.from_string("X...O....")
        engine = optimal_engine()
        first = engine.choose_move(board, X, O)
        assert all(engine.choose_move(board, X, O) == first for _ in range(5))

    def test_self_play_from_empty_draws(self):
        me = engine_player(optimal_engine())
        assert play_game(me, me) == EMPTY

    def test_pruned_scores_match_unpruned(self):
        engine = optimal_engine()
        for cells, player in iter_all_legal_nonterminal_states():
            if sum(1 for v in cells if v != EMPTY) < 5:
                continue
            board = Board(cells)
            scores = engine.score_moves(board, player, other(player))
            for i, score in scores.items():
                board.apply_move(i, player)
                assert plain_minimax(board, 0, False, player, other(player)) == score
                board.undo_move(i)

    def test_pruning_visits_fewer_nodes(self):
        board = Board.from_string("X...O....")
        engine = optimal_engine()
        result = engine.search(board, X, O)
        assert result.nodes == engine.nodes
        assert 0 < result.nodes < count_full_tree(board, X)

    def test_search_picks_first_best_of_score_moves(self):
        engine = optimal_engine()
        for text in ("X...O....", "XO..X....", "XX..O...O", "....X...."):
            board = Board.from_string(text)
            mark = board.side_to_move()
            scores = engine.score_moves(board, mark, other(mark))
            best = max(scores.values())
            result = engine.search(board, mark, other(mark))
            assert result.score == best
            assert result.index == min(i for i, s in scores.items() if s == best)

    def test_scores_are_small_integers(self):
        scores = optimal_engine().score_moves(Board.from_string("X...O...."), X, O)
        assert all(isinstance(s, int) and -WIN_SCORE <= s <= WIN_SCORE for s in scores.values())

    def test_finished_board_is_rejected(self):
        with pytest.raises(ValueError):
            optimal_engine().choose_move(Board.from_string("XXXOO...."), O, X)
        with pytest.raises(ValueError):
            optimal_engine().choose_move(Board.from_string("XOXXOOOXX"), O, X)


class TestRandomBranch:
    def test_random_draw_below_threshold_picks_random_cell(self):
        rng = ScriptedRng(draws=[0.1], picks=[2])
        board = Board.from_string("XX.OO....")
        result = SearchEngine(random_move_prob=0.2, rng=rng).search(board, O, X)
        # legal moves are [2, 5, 6, 7, 8]
        assert result == SearchResult(index=6, score=None, randomized=True)
        assert rng.integer_calls == [5]

    def test_draw_at_threshold_searches(self):
        rng = ScriptedRng(draws=[0.2])
        result = SearchEngine(random_move_prob=0.2, rng=rng).search(Board.from_string("XX.OO...."), O, X)
        assert result.index == 5
        assert not result.randomized
        assert rng.integer_calls == []

    def test_zero_probability_never_random(self):
        rng = ScriptedRng(draws=[0.0])
        result = SearchEngine(random_move_prob=0.0, rng=rng).search(Board.from_string("XX.OO...."), O, X)
        assert result.index == 5

    def test_always_random_stays_legal(self):
        engine = SearchEngine(random_move_prob=1.0, rng=np.random.default_rng(7))
        board = Board.from_string("XOX.O.X..")
        seen = set()
        for _ in range(100):
            result = engine.search(board, X, O)
            assert result.randomized
            assert board.is_empty(result.index)
            seen.add(result.index)
        assert seen == {3, 5, 7, 8}

    def test_default_engine_uses_numpy_generator(self):
        engine = SearchEngine()
        assert engine.random_move_prob == 0.2
        assert isinstance(engine.rng, np.random.Generator)
