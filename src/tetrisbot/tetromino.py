"""Tetromino definitions and placement transfer.

Every shape carries four hand-authored 4x4 rotation patterns.  A pattern is
placed on the board by anchoring its top-left corner at ``(anchor_row,
anchor_col)`` and resolving each set cell through :meth:`Board.index_of`.  If a
single cell falls outside the board the whole transfer fails, which is how
rotations against a wall are rejected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .board import Board

# Absolute board indices of the four cells of a piece.
Positions = Tuple[int, int, int, int]
Pattern = NDArray[np.bool_]
Color = Tuple[int, int, int]

NUM_ROTATIONS = 4


class TetrominoType(IntEnum):
    """The seven canonical shapes, in the order used to store them on the board."""

    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    Z = 5
    T = 6


def _pattern(*rows: str) -> Pattern:
    """Build a read-only 4x4 pattern from rows of ``#`` and ``.``."""

    grid = np.array([[ch == "#" for ch in row] for row in rows], dtype=bool)
    if grid.shape != (4, 4) or int(grid.sum()) != 4:
        raise ValueError(f"Malformed tetromino pattern: {rows!r}")
    grid.setflags(write=False)
    return grid


_I_VERTICAL = _pattern(".#..", ".#..", ".#..", ".#..")
_I_HORIZONTAL = _pattern("....", "####", "....", "....")
_O_SQUARE = _pattern(".##.", ".##.", "....", "....")
_S_FLAT = _pattern(".##.", "##..", "....", "....")
_S_UPRIGHT = _pattern(".#..", ".##.", "..#.", "....")
_Z_FLAT = _pattern(".##.", "..##", "....", "....")
_Z_UPRIGHT = _pattern("...#", "..##", "..#.", "....")


# Shared table of rotation patterns.  Shapes with fewer than four distinct
# orientations repeat them so that every shape cycles through four states.
ROTATION_PATTERNS: Dict[TetrominoType, Tuple[Pattern, ...]] = {
    TetrominoType.I: (_I_VERTICAL, _I_HORIZONTAL, _I_VERTICAL, _I_HORIZONTAL),
    TetrominoType.J: (
        _pattern("..#.", "..#.", ".##.", "...."),
        _pattern(".#..", ".###", "....", "...."),
        _pattern("..##", "..#.", "..#.", "...."),
        _pattern("....", ".###", "...#", "...."),
    ),
    TetrominoType.L: (
        _pattern(".#..", ".#..", ".##.", "...."),
        _pattern("....", "###.", "#...", "...."),
        _pattern("##..", ".#..", ".#..", "...."),
        _pattern("..#.", "###.", "....", "...."),
    ),
    TetrominoType.O: (_O_SQUARE, _O_SQUARE, _O_SQUARE, _O_SQUARE),
    TetrominoType.S: (_S_FLAT, _S_UPRIGHT, _S_FLAT, _S_UPRIGHT),
    TetrominoType.Z: (_Z_FLAT, _Z_UPRIGHT, _Z_FLAT, _Z_UPRIGHT),
    TetrominoType.T: (
        _pattern(".#..", "###.", "....", "...."),
        _pattern(".#..", ".##.", ".#..", "...."),
        _pattern("....", "###.", ".#..", "...."),
        _pattern(".#..", "##..", ".#..", "...."),
    ),
}


# Colours for each tetromino type
SHAPE_COLORS: Dict[TetrominoType, Color] = {
    TetrominoType.I: (255, 109, 194),
    TetrominoType.J: (253, 249, 0),
    TetrominoType.L: (0, 228, 48),
    TetrominoType.O: (0, 121, 241),
    TetrominoType.S: (112, 31, 126),
    TetrominoType.Z: (255, 161, 0),
    TetrominoType.T: (211, 176, 131),
}


def pattern_columns(pattern: Pattern) -> Tuple[int, int]:
    """Return the smallest and largest local column holding a block."""

    cols = np.flatnonzero(pattern.any(axis=0))
    return int(cols[0]), int(cols[-1])


def pattern_to_positions(
    board: Board, pattern: Pattern, anchor_row: int, anchor_col: int
) -> Optional[Positions]:
    """Resolve ``pattern`` anchored at ``(anchor_row, anchor_col)``.

    Set cells are visited in row-major order.  Returns the four board indices
    in that order, or ``None`` as soon as one cell lies outside the board.
    """

    positions = []
    for local_row, local_col in zip(*np.nonzero(pattern)):
        index = board.index_of(anchor_row + int(local_row), anchor_col + int(local_col))
        if index is None:
            return None
        positions.append(index)
    return tuple(positions)  # type: ignore[return-value]


def spawn_column(board: Board) -> int:
    return board.width // 2 - 2


def random_shape(rng: np.random.Generator) -> TetrominoType:
    """Draw one of the seven shapes uniformly at random."""

    return TetrominoType(int(rng.integers(len(TetrominoType))))


@dataclass
class Tetromino:
    """Active falling piece.

    ``positions`` always mirrors ``shape``/``rotation`` resolved at the
    anchor; callers that move the piece update all of them together.
    """

    shape: TetrominoType
    positions: Positions
    rotation: int = 0
    anchor_row: int = 0
    anchor_col: int = 0
    patterns: Tuple[Pattern, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Raises ValueError for anything that is not one of the seven shapes.
        self.shape = TetrominoType(self.shape)
        self.patterns = ROTATION_PATTERNS[self.shape]

    @classmethod
    def spawn(cls, shape: TetrominoType | int, board: Board) -> "Tetromino":
        """Create ``shape`` at the spawn anchor in rotation state ``0``."""

        shape = TetrominoType(shape)
        col = spawn_column(board)
        positions = pattern_to_positions(board, ROTATION_PATTERNS[shape][0], 0, col)
        if positions is None:
            raise ValueError(f"Board of width {board.width} cannot hold a spawned piece")
        return cls(shape=shape, positions=positions, rotation=0, anchor_row=0, anchor_col=col)

    @property
    def next_rotation(self) -> int:
        return (self.rotation + 1) % NUM_ROTATIONS

    def pattern(self, rotation: Optional[int] = None) -> Pattern:
        """Return the pattern for ``rotation`` (defaults to the current one)."""

        if rotation is None:
            rotation = self.rotation
        return self.patterns[rotation % NUM_ROTATIONS]

    @property
    def color(self) -> Color:
        return SHAPE_COLORS[self.shape]


__all__ = [
    "NUM_ROTATIONS",
    "Positions",
    "ROTATION_PATTERNS",
    "SHAPE_COLORS",
    "Tetromino",
    "TetrominoType",
    "pattern_columns",
    "pattern_to_positions",
    "random_shape",
    "spawn_column",
]
