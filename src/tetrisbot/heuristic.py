"""Linear heuristic used by the agent to rank candidate placements.

A placement's score is a weighted sum of five features.  Four of them depend
only on a single cell and the locked board, so their weighted total is
memoised per cell index for the duration of one decision; the fifth, whether
the placement completes a row, is evaluated per placement.

Features
--------
``lines_cleared``
    ``1`` if the four cells complete at least one row, else ``0``.
``wall_contact``
    Cells lying in the first or last column.
``block_contact``
    Occupied neighbours to the left, right and below each cell.
``covered_holes``
    Cells sitting directly on top of an occupied cell.
``height``
    Sum of the cells' row numbers.  Rows grow downwards, so a positive
    weight favours deep placements.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .board import Board
from .search import Placement
from .tetromino import Positions


LOGGER = logging.getLogger(__name__)

FEATURE_NAMES = (
    "lines_cleared",
    "wall_contact",
    "block_contact",
    "covered_holes",
    "height",
)
FEAT_DIM = len(FEATURE_NAMES)


@dataclass(frozen=True)
class HeuristicWeights:
    """Coefficients for each feature, in :data:`FEATURE_NAMES` order."""

    lines_cleared: float = 10.0
    wall_contact: float = 0.5
    block_contact: float = 1.0
    covered_holes: float = 0.5
    height: float = 1.0

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "HeuristicWeights":
        if len(values) != FEAT_DIM:
            raise ValueError(f"Expected {FEAT_DIM} weights, got {len(values)}")
        return cls(*(float(v) for v in values))

    def as_array(self) -> NDArray[np.float64]:
        return np.array([getattr(self, f.name) for f in fields(self)], dtype=np.float64)

    def perturb(
        self,
        rng: np.random.Generator,
        scale: float = 0.1,
        index: Optional[int] = None,
    ) -> "HeuristicWeights":
        """Return a copy with Gaussian noise added to the coefficients.

        When ``index`` is given only that coefficient changes.
        """

        values = self.as_array()
        if index is None:
            values += rng.normal(0.0, scale, size=FEAT_DIM)
        else:
            values[index] += rng.normal(0.0, scale)
        return HeuristicWeights.from_sequence(values.tolist())

    def with_only(self, **overrides: float) -> "HeuristicWeights":
        """Return weights that are zero except for ``overrides``."""

        zeros = HeuristicWeights.from_sequence([0.0] * FEAT_DIM)
        return replace(zeros, **overrides)


@dataclass(frozen=True)
class Evaluation:
    """A candidate placement paired with its score."""

    placement: Placement
    score: float


def completes_line(board: Board, positions: Iterable[int]) -> bool:
    """Return ``True`` if filling ``positions`` would complete any row."""

    cells = list(positions)
    grid = board.rows()
    for row in {board.row_col(index)[0] for index in cells}:
        filled = grid[row].copy()
        for index in cells:
            cell_row, col = board.row_col(index)
            if cell_row == row:
                filled[col] = True
        if filled.all():
            return True
    return False


def cell_features(board: Board, index: int) -> NDArray[np.float64]:
    """Return the raw per-cell features for ``index``.

    The order matches :data:`FEATURE_NAMES` without ``lines_cleared``.
    """

    row, col = board.row_col(index)
    wall = 1.0 if col == 0 or col == board.width - 1 else 0.0

    contact = 0.0
    for d_row, d_col in ((0, -1), (0, 1), (1, 0)):
        neighbour = board.index_of(row + d_row, col + d_col)
        if neighbour is not None and board.is_occupied(neighbour):
            contact += 1.0

    covered = 0.0
    if row < board.height - 1 and board.is_occupied(index + board.width):
        covered = 1.0

    return np.array([wall, contact, covered, float(row)], dtype=np.float64)


class HeuristicScorer:
    """Score placements with a fixed set of :class:`HeuristicWeights`."""

    def __init__(self, weights: Optional[HeuristicWeights] = None) -> None:
        self.weights = weights or HeuristicWeights()

    @property
    def weights(self) -> HeuristicWeights:
        return self._weights

    @weights.setter
    def weights(self, weights: HeuristicWeights) -> None:
        self._weights = weights
        # Wall, contact, covered and height coefficients, in cell_features order.
        self._cell_weights = weights.as_array()[1:]

    def _cell_score(self, board: Board, index: int, cache: Dict[int, float]) -> float:
        cached = cache.get(index)
        if cached is None:
            cached = float(cell_features(board, index) @ self._cell_weights)
            cache[index] = cached
        return cached

    def score(
        self,
        board: Board,
        positions: Positions,
        cache: Optional[Dict[int, float]] = None,
    ) -> float:
        """Return the heuristic score of locking a piece at ``positions``."""

        if cache is None:
            cache = {}
        total = 0.0
        if completes_line(board, positions):
            total += self.weights.lines_cleared
        for index in positions:
            total += self._cell_score(board, index, cache)
        return total

    def evaluate(self, board: Board, placements: Sequence[Placement]) -> List[Evaluation]:
        """Score every placement, sharing one per-cell cache across them."""

        cache: Dict[int, float] = {}
        return [
            Evaluation(placement=p, score=self.score(board, p.positions, cache))
            for p in placements
        ]

    def best(self, board: Board, placements: Sequence[Placement]) -> Optional[Evaluation]:
        """Return the highest scoring placement, or ``None`` if there is none.

        Ties keep the earliest placement.
        """

        best: Optional[Evaluation] = None
        for evaluation in self.evaluate(board, placements):
            if best is None or evaluation.score > best.score:
                best = evaluation
        if best is not None:
            LOGGER.debug(
                "Best of %d placements: rotation=%d column=%d score=%.3f",
                len(placements),
                best.placement.rotation,
                best.placement.column,
                best.score,
            )
        return best


__all__ = [
    "FEATURE_NAMES",
    "FEAT_DIM",
    "Evaluation",
    "HeuristicScorer",
    "HeuristicWeights",
    "cell_features",
    "completes_line",
]
