"""
D4 symmetries of the TicTacToe board (8 transforms).

Used to check that the engine scores mirrored and rotated positions the
same way. Transform ids:
  0 identity, 1-3 rotations by 90/180/270 degrees clockwise,
  4 left-right mirror, 5 up-down mirror, 6 main-diagonal and
  7 anti-diagonal reflection.
"""

from typing import Dict, List

import numpy as np

_GRID = np.arange(9).reshape(3, 3)

# SYM_MAPS[k][i] is the old cell that lands on cell i under transform k
SYM_MAPS = [
    grid.flatten()
    for grid in (
        _GRID,
        np.rot90(_GRID, -1),
        np.rot90(_GRID, 2),
        np.rot90(_GRID, 1),
        np.fliplr(_GRID),
        np.flipud(_GRID),
        _GRID.T,
        np.rot90(_GRID, 2).T,
    )
]


def apply_symmetry_board(cells: List[int], sym_id: int) -> List[int]:
    """Return the cells of the board seen through transform `sym_id`."""
    return [cells[int(src)] for src in SYM_MAPS[sym_id]]


def apply_symmetry_scores(scores: Dict[int, int], sym_id: int) -> Dict[int, int]:
    """
    Move per-cell scores to where their cells land under the transform.

    Args:
        scores: {cell index: score}
        sym_id: symmetry ID (0-7)

    Returns:
        {transformed cell index: score}, in ascending cell order
    """
    return {
        i: scores[int(src)]
        for i, src in enumerate(SYM_MAPS[sym_id])
        if int(src) in scores
    }
