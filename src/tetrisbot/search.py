"""Enumeration of the resting placements reachable by the active piece.

For each of the four rotation states the piece's pattern is slid across
every anchor column that keeps its blocks on the board, then dropped straight
down one row at a time until the next step would overlap a locked cell or
leave the grid.  Symmetric shapes are not deduplicated: an ``O`` piece yields
the same resting cells once per rotation state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .board import Board
from .tetromino import (
    NUM_ROTATIONS,
    Positions,
    Tetromino,
    pattern_columns,
    pattern_to_positions,
)


@dataclass(frozen=True)
class Placement:
    """Final resting position for the active piece."""

    rotation: int
    column: int
    row: int
    positions: Positions


def drop_positions(board: Board, positions: Positions) -> Optional[Positions]:
    """Return where ``positions`` comes to rest when dropped straight down.

    Returns ``None`` when the starting cells already overlap locked blocks.
    """

    cells = np.asarray(positions, dtype=np.intp)
    if board.occupied[cells].any():
        return None
    while True:
        below = cells + board.width
        if below.max() >= board.size or board.occupied[below].any():
            break
        cells = below
    return tuple(int(i) for i in cells)  # type: ignore[return-value]


def enumerate_placements(board: Board, tetromino: Tetromino) -> List[Placement]:
    """Return every resting placement of ``tetromino`` across all rotations.

    The search starts from the piece's current anchor row.  Placements are
    ordered by rotation, then by anchor column from left to right.
    """

    placements: List[Placement] = []
    for rotation in range(NUM_ROTATIONS):
        pattern = tetromino.pattern(rotation)
        min_col, max_col = pattern_columns(pattern)
        for column in range(-min_col, board.width - max_col):
            start = pattern_to_positions(board, pattern, tetromino.anchor_row, column)
            if start is None:
                continue
            rest = drop_positions(board, start)
            if rest is None:
                continue
            rows_dropped = (rest[0] - start[0]) // board.width
            placements.append(
                Placement(
                    rotation=rotation,
                    column=column,
                    row=tetromino.anchor_row + rows_dropped,
                    positions=rest,
                )
            )
    return placements


__all__ = ["Placement", "drop_positions", "enumerate_placements"]
