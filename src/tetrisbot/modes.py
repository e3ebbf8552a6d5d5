"""Human and agent play modes plus the per-frame controller.

Both modes drive the same :class:`GameState` through a shared contract:
``board``, ``update(is_tick, now, inputs)`` and ``draw()``.  The
:class:`Game` controller owns the tick clock and swaps between the two modes
when the agent toggle is pressed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board
from .config import GameConfig
from .game_state import GameState
from .heuristic import HeuristicScorer, HeuristicWeights
from .search import enumerate_placements
from .tetromino import SHAPE_COLORS, Color, TetrominoType


LOGGER = logging.getLogger(__name__)

EMPTY_COLOR: Color = (255, 255, 255)


@dataclass(frozen=True)
class InputState:
    """Keys held during one frame."""

    left: bool = False
    right: bool = False
    down: bool = False
    rotate: bool = False
    toggle_agent: bool = False


@dataclass(frozen=True)
class CellView:
    x: float
    y: float
    color: Color


@dataclass(frozen=True)
class Frame:
    """Everything a renderer needs to draw one frame."""

    cells: Tuple[CellView, ...]
    active: Tuple[CellView, ...]
    next_shape: TetrominoType


class PlayMode:
    """Base class for anything that advances a :class:`GameState` per frame."""

    name = "base"

    def __init__(self, state: GameState) -> None:
        self.state = state

    @property
    def board(self) -> Board:
        return self.state.board

    def update(self, is_tick: bool, now: float, inputs: InputState) -> None:
        raise NotImplementedError

    def draw(self) -> Frame:
        config = self.state.config
        board = self.state.board
        origin = config.origin

        cells: List[CellView] = []
        for cell in board.cells():
            x, y = board.pixel_position(cell.row, cell.col, config.block_size, origin)
            color = SHAPE_COLORS[TetrominoType(cell.piece_type)] if cell.occupied else EMPTY_COLOR
            cells.append(CellView(x, y, color))

        piece = self.state.active
        active = []
        for index in piece.positions:
            row, col = board.row_col(index)
            x, y = board.pixel_position(row, col, config.block_size, origin)
            active.append(CellView(x, y, piece.color))

        return Frame(cells=tuple(cells), active=tuple(active), next_shape=self.state.upcoming)


class HumanMode(PlayMode):
    """Keyboard-driven play with debounced directional input."""

    name = "human"

    def __init__(self, state: GameState, now: float = 0.0) -> None:
        super().__init__(state)
        self.last_input_time = now
        self._rotate_held = False

    def update(self, is_tick: bool, now: float, inputs: InputState) -> None:
        d_col = 0
        d_row = 1 if is_tick else 0

        accepted = False
        if now - self.last_input_time > self.state.config.debounce:
            if inputs.right:
                d_col += 1
                accepted = True
            if inputs.left:
                d_col -= 1
                accepted = True
            if inputs.down:
                d_row += 1
                accepted = True
        if accepted:
            self.last_input_time = now

        # Rotation fires once per key press, not while held.
        if inputs.rotate and not self._rotate_held:
            self.state.rotate()
        self._rotate_held = inputs.rotate

        # Never step more than one row per frame.
        d_row = min(d_row, 1)

        self.state.move(d_col, 0, commit_on_collision=False)
        self.state.move(0, d_row, commit_on_collision=True)


class AgentMode(PlayMode):
    """Places each piece at the best scoring position once per tick."""

    name = "agent"

    def __init__(self, state: GameState, scorer: Optional[HeuristicScorer] = None) -> None:
        super().__init__(state)
        self.scorer = scorer or HeuristicScorer()

    def update(self, is_tick: bool, now: float, inputs: InputState) -> None:
        if not is_tick:
            return
        placements = enumerate_placements(self.state.board, self.state.active)
        best = self.scorer.best(self.state.board, placements)
        if best is None:
            return
        self.state.place(best.placement)


class Game:
    """Frame-level controller tying a game state, a play mode and the tick clock."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        seed: Optional[int] = None,
        agent: bool = True,
        weights: Optional[HeuristicWeights] = None,
        now: float = 0.0,
    ) -> None:
        self.config = config or GameConfig()
        self.state = GameState(config=self.config, seed=seed)
        self.scorer = HeuristicScorer(weights)
        self.next_tick_time = now + self.config.tick_interval
        self.frame_count = 0
        self._toggle_held = False
        self.mode: PlayMode = self._make_mode(agent, now)

    @property
    def board(self) -> Board:
        return self.mode.board

    @property
    def agent_enabled(self) -> bool:
        return isinstance(self.mode, AgentMode)

    def _make_mode(self, agent: bool, now: float) -> PlayMode:
        if agent:
            return AgentMode(self.state, self.scorer)
        return HumanMode(self.state, now)

    def consume_tick(self, now: float) -> bool:
        """Return ``True`` if a tick is due at ``now`` and schedule the next one."""

        if now > self.next_tick_time:
            self.next_tick_time += self.config.tick_interval
            return True
        return False

    def update(self, now: float, inputs: Optional[InputState] = None) -> None:
        """Advance the simulation by one frame."""

        inputs = inputs or InputState()
        self.frame_count += 1

        if inputs.toggle_agent and not self._toggle_held:
            self.mode = self._make_mode(not self.agent_enabled, now)
            LOGGER.info("Switched to %s control", self.mode.name)
        self._toggle_held = inputs.toggle_agent

        self.mode.update(self.consume_tick(now), now, inputs)

    def step(self, now: float = 0.0) -> None:
        """Run one tick frame without consulting the clock (headless play)."""

        self.frame_count += 1
        self.mode.update(True, now, InputState())

    def draw(self) -> Frame:
        return self.mode.draw()


__all__ = [
    "AgentMode",
    "CellView",
    "EMPTY_COLOR",
    "Frame",
    "Game",
    "HumanMode",
    "InputState",
    "PlayMode",
]
