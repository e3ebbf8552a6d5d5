"""Utility helpers for the Tetris engine."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional, Tuple

from .board import Board
from .tetromino import Positions, Tetromino


class CollisionType(Enum):
    """Outcome of trying to translate the active piece."""

    NONE = "none"
    WALL = "wall"
    GROUND = "ground"
    BLOCK = "block"


def classify_move(
    board: Board, tetromino: Tetromino, d_col: int, d_row: int
) -> Tuple[CollisionType, Optional[Positions]]:
    """Classify translating ``tetromino`` by ``d_col`` columns and ``d_row`` rows.

    Cells are checked in order and the first one that leaves the board
    decides between ``GROUND`` (it would pass the bottom row) and ``WALL``.
    When every cell stays on the board, any overlap with a locked cell gives
    ``BLOCK``.  Only for ``NONE`` are the translated positions returned.
    """

    moved = []
    for index in tetromino.positions:
        row, col = board.row_col(index)
        new_row = row + d_row
        new_col = col + d_col
        target = board.index_of(new_row, new_col)
        if target is None:
            if new_row >= board.height:
                return CollisionType.GROUND, None
            return CollisionType.WALL, None
        moved.append(target)

    if board.any_occupied(moved):
        return CollisionType.BLOCK, None
    return CollisionType.NONE, tuple(moved)  # type: ignore[return-value]


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without locking the piece.  Values follow :meth:`Board.as_grid`.
    """

    grid = board.as_grid()
    if active is not None:
        for index in active.positions:
            row, col = board.row_col(index)
            grid[row][col] = int(active.shape) + 1
    return grid


def format_grid(grid: List[List[int]]) -> str:
    return "\n".join("".join("#" if cell else "." for cell in row) for row in grid)


__all__ = ["CollisionType", "classify_move", "format_grid", "render_grid"]
