"""Headless demo of the placement agent.

Run with: `python -m tetrisbot`

The agent plays a fixed number of ticks on its own, then the final board is
printed with the active tetromino overlaid.  Useful as a smoke test that the
engine, search and scorer work together without opening a window.
"""

from __future__ import annotations

import argparse
import logging

from .config import GameConfig
from .modes import Game
from .utils import format_grid, render_grid


LOGGER = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--frames", type=int, default=200, help="Number of agent ticks to play.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece generator.")
    parser.add_argument("--width", type=int, default=None, help="Board width in cells.")
    parser.add_argument("--height", type=int, default=None, help="Board height in cells.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    game = Game(GameConfig.from_args(args), seed=args.seed, agent=True)
    for _ in range(args.frames):
        game.step()

    state = game.state
    LOGGER.info(
        "Played %d ticks: %d pieces, %d lines in the current game, %d game(s) over",
        args.frames,
        state.pieces,
        state.lines,
        state.games,
    )
    print(format_grid(render_grid(state.board, state.active)))


if __name__ == "__main__":
    main()
