"""High level game state container and movement rules."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .board import Board
from .config import GameConfig
from .search import Placement
from .tetromino import Tetromino, TetrominoType, pattern_to_positions, random_shape
from .utils import CollisionType, classify_move


LOGGER = logging.getLogger(__name__)

# Collisions that end a piece's life when the move asked for it.
_COMMITTING = (CollisionType.GROUND, CollisionType.BLOCK)


@dataclass
class GameState:
    """Mutable state for a Tetris game session.

    The active piece's cells are never marked on the board; they are only
    written when the piece commits.
    """

    config: GameConfig = field(default_factory=GameConfig)
    seed: Optional[int] = None
    board: Board = field(init=False)
    active: Tetromino = field(init=False)
    upcoming: TetrominoType = field(init=False)
    pieces: int = 0
    lines: int = 0
    games: int = 0
    # Lines cleared across every game played by this state.
    total_lines: int = 0

    def __post_init__(self) -> None:
        self.rng = np.random.default_rng(self.seed)
        self.reset_game()

    def _random_type(self) -> TetrominoType:
        return random_shape(self.rng)

    def spawn_tetromino(self) -> Tetromino:
        """Promote the upcoming piece to active and draw a new upcoming one."""

        self.active = Tetromino.spawn(self.upcoming, self.board)
        self.upcoming = self._random_type()
        return self.active

    def reset_game(self) -> None:
        """Start over with an empty board and freshly drawn pieces."""

        self.board = Board(self.config.width, self.config.height)
        self.pieces = 0
        self.lines = 0
        self.active = Tetromino.spawn(self._random_type(), self.board)
        self.upcoming = self._random_type()

    def game_over(self) -> None:
        LOGGER.info(
            "Game over after %d pieces and %d lines. Resetting.", self.pieces, self.lines
        )
        self.games += 1
        self.reset_game()

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def move(self, d_col: int, d_row: int, commit_on_collision: bool = False) -> CollisionType:
        """Try to translate the active piece and return the collision outcome.

        A free move updates the positions and the anchor.  When
        ``commit_on_collision`` is set, hitting the ground or a block locks the
        piece in its current cells; hitting a wall never does.
        """

        collision, moved = classify_move(self.board, self.active, d_col, d_row)
        if collision is CollisionType.NONE:
            assert moved is not None
            self.active.positions = moved
            self.active.anchor_row += d_row
            self.active.anchor_col += d_col
        elif commit_on_collision and collision in _COMMITTING:
            self.commit()
        return collision

    def rotate(self) -> bool:
        """Rotate the active piece in place; return ``False`` if rejected."""

        piece = self.active
        target = piece.next_rotation
        positions = pattern_to_positions(
            self.board, piece.pattern(target), piece.anchor_row, piece.anchor_col
        )
        if positions is None or self.board.any_occupied(positions):
            return False
        piece.positions = positions
        piece.rotation = target
        return True

    def commit(self) -> int:
        """Lock the active piece, spawn the next one, then clear full rows.

        The spawn check runs against the board as locked: if the new piece
        overlaps any cell the game is over, the state is reset and no rows
        are cleared.  Returns the number of rows cleared.
        """

        self.board.lock(self.active.positions, int(self.active.shape))
        self.pieces += 1

        self.spawn_tetromino()
        if self.board.any_occupied(self.active.positions):
            self.game_over()
            return 0

        cleared = self.board.clear_full_rows()
        if cleared:
            self.lines += cleared
            self.total_lines += cleared
            LOGGER.debug("Cleared %d row(s). Lines: %d", cleared, self.lines)
        return cleared

    def place(self, placement: Placement) -> int:
        """Move the active piece straight to ``placement`` and commit it."""

        positions = placement.positions
        if len(set(positions)) != 4 or not all(0 <= i < self.board.size for i in positions):
            raise ValueError(f"Invalid placement cells: {positions!r}")
        piece = self.active
        piece.rotation = placement.rotation
        piece.anchor_row = placement.row
        piece.anchor_col = placement.column
        piece.positions = positions
        return self.commit()


__all__ = ["GameState"]
