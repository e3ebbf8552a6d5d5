"""Falling-block puzzle engine with a heuristic placement agent."""

from .board import Board, Cell
from .config import GameConfig
from .tetromino import Tetromino, TetrominoType, pattern_to_positions
from .game_state import GameState
from .search import Placement, enumerate_placements
from .heuristic import Evaluation, HeuristicScorer, HeuristicWeights
from .modes import AgentMode, Frame, Game, HumanMode, InputState
from .utils import CollisionType, classify_move, render_grid

__all__ = [
    "AgentMode",
    "Board",
    "Cell",
    "CollisionType",
    "Evaluation",
    "Frame",
    "Game",
    "GameConfig",
    "GameState",
    "HeuristicScorer",
    "HeuristicWeights",
    "HumanMode",
    "InputState",
    "Placement",
    "Tetromino",
    "TetrominoType",
    "classify_move",
    "enumerate_placements",
    "pattern_to_positions",
    "render_grid",
]
