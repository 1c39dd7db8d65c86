"""
TicTacToe board state and rules.

Board representation: list[int] of length 9, row-major
  - 0: empty
  - +1: X
  - -1: O

X always moves first.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

EMPTY = 0
X = +1
O = -1

SYMBOLS = {EMPTY: " ", X: "X", O: "O"}

# Winning lines (rows, columns, diagonals)
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),              # diagonals
)


def other(mark: int) -> int:
    """Return the opposing mark."""
    return -mark


# TerminalStatus kinds
ONGOING_KIND = "ongoing"
WON_KIND = "won"
DRAW_KIND = "draw"
KINDS = (ONGOING_KIND, WON_KIND, DRAW_KIND)


@dataclass(frozen=True)
class TerminalStatus:
    """Result of evaluating a board: ongoing, won by a mark, or drawn."""
    kind: str  # one of KINDS
    winner: int = EMPTY

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"unknown status kind {self.kind!r}")

    @property
    def is_terminal(self) -> bool:
        return self.kind != ONGOING_KIND

    def __str__(self) -> str:
        if self.kind == WON_KIND:
            return f"Won({SYMBOLS[self.winner]})"
        return self.kind.capitalize()


ONGOING = TerminalStatus(ONGOING_KIND)
DRAW = TerminalStatus(DRAW_KIND)


def won(mark: int) -> TerminalStatus:
    return TerminalStatus(WON_KIND, mark)


class Board:
    """
    Mutable 3x3 board.

    Search explores hypothetical moves in place with apply_move/undo_move,
    so every apply must be paired with an undo before control returns.
    """

    def __init__(self, cells: Optional[Iterable[int]] = None):
        self.cells: List[int] = list(cells) if cells is not None else [EMPTY] * 9
        if len(self.cells) != 9:
            raise ValueError(f"board needs 9 cells, got {len(self.cells)}")

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Parse a 9-character board, e.g. "XX.OO....".

        '.', '_' and ' ' are empty squares.
        """
        lookup = {"X": X, "O": O, ".": EMPTY, "_": EMPTY, " ": EMPTY}
        try:
            return cls(lookup[ch] for ch in text.upper())
        except KeyError as e:
            raise ValueError(f"unknown board symbol {e.args[0]!r}") from None

    def is_empty(self, index: int) -> bool:
        return self.cells[index] == EMPTY

    def apply_move(self, index: int, mark: int) -> None:
        self.cells[index] = mark

    def undo_move(self, index: int) -> None:
        self.cells[index] = EMPTY

    def reset(self) -> None:
        self.cells[:] = [EMPTY] * 9

    def evaluate(self) -> TerminalStatus:
        """First complete line in WIN_LINES order wins; a full board is a draw."""
        cells = self.cells
        for a, b, c in WIN_LINES:
            if cells[a] != EMPTY and cells[a] == cells[b] == cells[c]:
                return won(cells[a])
        if EMPTY not in cells:
            return DRAW
        return ONGOING

    def legal_moves(self) -> List[int]:
        """Return list of legal move indices (empty squares)."""
        return [i for i, v in enumerate(self.cells) if v == EMPTY]

    def count(self, mark: int) -> int:
        return sum(1 for v in self.cells if v == mark)

    def side_to_move(self) -> int:
        return side_to_move(self.cells)

    def copy(self) -> "Board":
        return Board(self.cells)

    def __eq__(self, other_board) -> bool:
        if not isinstance(other_board, Board):
            return NotImplemented
        return self.cells == other_board.cells

    def __repr__(self) -> str:
        text = "".join("." if v == EMPTY else SYMBOLS[v] for v in self.cells)
        return f"Board({text!r})"

    def __str__(self) -> str:
        rows = []
        for r in range(3):
            rows.append("|".join(SYMBOLS[self.cells[r * 3 + c]] for c in range(3)))
        return "\n-+-+-\n".join(rows)


def winners_set(cells: List[int]) -> set:
    """Return set of winners (+1, -1, or both if illegal)."""
    wins = set()
    for a, b, c in WIN_LINES:
        s = cells[a] + cells[b] + cells[c]
        if s == 3:
            wins.add(X)
        elif s == -3:
            wins.add(O)
    return wins


def side_to_move(cells: List[int]) -> int:
    """Infer side to move from board state (X plays first)."""
    x_cnt = sum(1 for v in cells if v == X)
    o_cnt = sum(1 for v in cells if v == O)
    return X if x_cnt == o_cnt else O


def is_legal_board(cells: List[int]) -> bool:
    """Check if board respects game rules."""
    x_cnt = sum(1 for v in cells if v == X)
    o_cnt = sum(1 for v in cells if v == O)

    # X goes first, so x_cnt == o_cnt or x_cnt == o_cnt + 1
    if not (x_cnt == o_cnt or x_cnt == o_cnt + 1):
        return False

    # Can't have both winners
    if len(winners_set(cells)) >= 2:
        return False

    return True
