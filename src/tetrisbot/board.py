"""Board representation for the Tetris playfield.

Cells are stored in two flat NumPy arrays indexed by ``row * width + col``:
one holding occupancy and one holding the ordinal of the tetromino that
filled the cell.  :meth:`Board.index_of` is the only place where coordinates
are bounds-checked; everything else works on linear indices.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import GRID_HEIGHT, GRID_WIDTH


@dataclass(frozen=True)
class Cell:
    """Read-only view of a single board cell."""

    index: int
    row: int
    col: int
    occupied: bool
    piece_type: int


class Board:
    """Fixed-size grid holding the locked cells."""

    def __init__(self, width: int = GRID_WIDTH, height: int = GRID_HEIGHT) -> None:
        self._width = int(width)
        self._height = int(height)
        size = self._width * self._height
        self.occupied: NDArray[np.bool_] = np.zeros(size, dtype=bool)
        self.piece_types: NDArray[np.uint8] = np.zeros(size, dtype=np.uint8)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> int:
        """Total number of cells on the board."""

        return self._width * self._height

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------
    def index_of(self, row: int, col: int) -> Optional[int]:
        """Return the linear index of ``(row, col)`` or ``None`` if off-board."""

        if 0 <= row < self._height and 0 <= col < self._width:
            return row * self._width + col
        return None

    def row_col(self, index: int) -> Tuple[int, int]:
        return divmod(int(index), self._width)

    def pixel_position(
        self, row: int, col: int, block_size: int, origin: Tuple[float, float] = (0.0, 0.0)
    ) -> Tuple[float, float]:
        """Return the top-left pixel of ``(row, col)`` for a renderer."""

        x0, y0 = origin
        return x0 + col * block_size, y0 + row * block_size

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def is_occupied(self, index: int) -> bool:
        return bool(self.occupied[index])

    def piece_type_at(self, index: int) -> int:
        return int(self.piece_types[index])

    def set_occupied(self, index: int, piece_type: int) -> None:
        self.occupied[index] = True
        self.piece_types[index] = np.uint8(piece_type)

    def clear(self, index: int) -> None:
        self.occupied[index] = False

    def lock(self, positions: Iterable[int], piece_type: int) -> None:
        """Mark every index in ``positions`` as filled by ``piece_type``."""

        cells = np.fromiter(positions, dtype=np.intp)
        self.occupied[cells] = True
        self.piece_types[cells] = np.uint8(piece_type)

    def any_occupied(self, positions: Iterable[int]) -> bool:
        cells = np.fromiter(positions, dtype=np.intp)
        return bool(self.occupied[cells].any())

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.occupied))

    def cells(self) -> Iterator[Cell]:
        """Yield a :class:`Cell` for every grid position in index order."""

        for index in range(self.size):
            row, col = divmod(index, self._width)
            yield Cell(
                index=index,
                row=row,
                col=col,
                occupied=bool(self.occupied[index]),
                piece_type=int(self.piece_types[index]),
            )

    def rows(self) -> NDArray[np.bool_]:
        """Return an ``(height, width)`` view of the occupancy array."""

        return self.occupied.reshape(self._height, self._width)

    def as_grid(self) -> List[List[int]]:
        """Return a 2D copy where empty cells are ``0``.

        Filled cells hold the piece ordinal plus one so that every shape,
        including ordinal ``0``, is distinguishable from empty space.
        """

        values = np.where(self.occupied, self.piece_types.astype(np.int16) + 1, 0)
        return values.reshape(self._height, self._width).tolist()

    # ------------------------------------------------------------------
    # Line clearing
    # ------------------------------------------------------------------
    def find_full_row(self) -> Optional[int]:
        """Return the bottom-most fully occupied row, or ``None``."""

        full = np.all(self.rows(), axis=1)
        for row in range(self._height - 1, -1, -1):
            if full[row]:
                return row
        return None

    def clear_row(self, row: int) -> None:
        """Remove ``row`` and let every column above it fall by one cell."""

        for col in range(self._width):
            below = row * self._width + col
            self.occupied[below] = False
            for above_row in range(row - 1, -1, -1):
                above = above_row * self._width + col
                if self.occupied[above]:
                    self.occupied[above] = False
                    self.occupied[below] = True
                    self.piece_types[below] = self.piece_types[above]
                below = above

    def clear_full_rows(self) -> int:
        """Clear completed rows one at a time and return how many were removed."""

        cleared = 0
        row = self.find_full_row()
        while row is not None:
            self.clear_row(row)
            cleared += 1
            row = self.find_full_row()
        return cleared


__all__ = ["Board", "Cell"]
