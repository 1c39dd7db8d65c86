#!/usr/bin/env python3
"""
Evaluate the alpha-beta TicTacToe engine, or play against it.

Usage:
    python eval.py --games 200
    python eval.py --play
    python eval.py --play --human O --random-move-prob 0
"""

import sys
import time
import argparse
from pathlib import Path

import numpy as np

# Add src to path
sys.path = [str(Path(__file__).parent / "src")] + sys.path

from tictactoe import (
    X,
    O,
    GameConfig,
    GameSession,
    SearchEngine,
    eval_vs_random,
    eval_self_play,
    eval_solver_agreement_all_states,
    eval_symmetry_consistency,
)


def print_board(board):
    """Pretty print board."""
    print(board)


def play_interactive(config: GameConfig):
    """Play games against the engine until the user declines a rematch."""
    session = GameSession(config=config)

    print("\n=== Interactive Game ===")
    print(f"You are {'X (play first)' if session.human_mark == X else 'O (play second)'}")
    print("Enter moves as numbers 0-8:")
    print(" 0 | 1 | 2 ")
    print("---+---+---")
    print(" 3 | 4 | 5 ")
    print("---+---+---")
    print(" 6 | 7 | 8 ")
    print()

    while True:
        if not session.running:
            print_board(session.board)
            print(f"\n{session.status_text()}")
            try:
                again = input("Play again? [y/N]: ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print()
                return
            if again != "y":
                return
            session.restart()
            print()
            continue

        print_board(session.board)
        print(session.status_text())
        print()

        if session.computer_to_move:
            time.sleep(config.ai_delay_ms / 1000.0)
            result = session.play_computer()
            how = "random" if result.randomized else f"score {result.score}, {result.nodes} nodes"
            print(f"Engine plays: {result.index} ({how})")
            print()
            continue

        moves = session.board.legal_moves()
        try:
            action = int(input(f"Your move ({moves}): "))
        except ValueError:
            print("Invalid move, try again")
            continue
        except (EOFError, KeyboardInterrupt):
            print("\nGame aborted")
            return

        if not session.play_human(action):
            print("Invalid move, try again")


def main():
    parser = argparse.ArgumentParser(description="Evaluate TicTacToe alpha-beta engine")
    parser.add_argument("--play", action="store_true", help="Play interactive game")
    parser.add_argument("--human", type=str, default="X", choices=["X", "O"], help="Your mark")
    parser.add_argument("--games", type=int, default=200, help="Number of eval games")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--random-move-prob", type=float, default=0.2,
                        help="Chance the engine plays a random move")
    parser.add_argument("--delay-ms", type=int, default=200, help="Pause before engine reply")
    parser.add_argument("--no-progress", action="store_true", help="Hide progress bars")

    args = parser.parse_args()

    try:
        config = GameConfig(
            seed=args.seed,
            random_move_prob=args.random_move_prob,
            ai_delay_ms=args.delay_ms,
            human_mark=X if args.human == "X" else O,
            eval_games=args.games,
        )
    except ValueError as e:
        parser.error(str(e))

    # Interactive play
    if args.play:
        play_interactive(config)
        return

    progress = not args.no_progress
    rng = np.random.default_rng(config.seed)
    engine = SearchEngine(random_move_prob=config.random_move_prob, rng=rng)
    optimal = SearchEngine(random_move_prob=0.0)

    # Evaluation
    print("\n=== Evaluation ===")
    print(f"Random move probability: {config.random_move_prob:.0%}")

    # vs Random
    print(f"\nvs Random ({config.eval_games} games)...")
    w, d, l = eval_vs_random(engine, games=config.eval_games, rng=rng, progress=progress)
    print(f"  Wins:   {w:.2%}")
    print(f"  Draws:  {d:.2%}")
    print(f"  Losses: {l:.2%}")

    # Self-play with the random policy
    print(f"\nSelf-play ({config.eval_games} games)...")
    sp = eval_self_play(engine, games=config.eval_games, progress=progress)
    print(f"  X wins: {sp['x_w']:.2%}")
    print(f"  Draws:  {sp['draw']:.2%}")
    print(f"  O wins: {sp['o_w']:.2%}")

    # Optimal self-play is deterministic, one game is enough
    print("\nOptimal self-play...")
    sp = eval_self_play(optimal, games=1, progress=False)
    print(f"  Result: {'Draw' if sp['draw'] == 1.0 else 'Decisive (unexpected)'}")

    # Solver agreement
    print("\nSolver Agreement (all states)...")
    se = eval_solver_agreement_all_states(optimal, progress=progress)
    print(f"  States:      {se['solver_n_states']}")
    print(f"  Top-1 Opt:   {se['solver_opt_top1_acc']:.2%}")
    print(f"  Value Sign:  {se['solver_sign_acc']:.2%}")

    # Symmetry
    print("\nSymmetry Consistency...")
    sc = eval_symmetry_consistency(optimal, progress=progress)
    print(f"  States:      {sc['sym_n_states']}")
    print(f"  Consistent:  {sc['sym_consistent']:.2%}")


if __name__ == "__main__":
    main()
