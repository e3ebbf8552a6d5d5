"""Manually tune agent weights by random perturbation.

Run with::

    PYTHONPATH=src python examples/tune_weights.py

Each candidate is the default weight vector plus Gaussian noise.  Every
candidate plays the same seeded piece sequence for a fixed number of ticks and
is ranked by the number of lines it cleared.  Pass ``--help`` for options.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

import numpy as np

from tetrisbot.config import GameConfig
from tetrisbot.heuristic import FEATURE_NAMES, HeuristicWeights
from tetrisbot.modes import Game


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrialResult:
    weights: HeuristicWeights
    lines: int
    games_lost: int


def run_trial(weights: HeuristicWeights, *, ticks: int, seed: int, config: GameConfig) -> TrialResult:
    """Play ``ticks`` agent moves with ``weights`` and report the outcome."""

    game = Game(config, seed=seed, agent=True, weights=weights)
    for _ in range(ticks):
        game.step()
    state = game.state
    return TrialResult(weights=weights, lines=state.total_lines, games_lost=state.games)


def _format_weights(weights: HeuristicWeights) -> str:
    values = weights.as_array()
    return ", ".join(f"{name}={value:.3f}" for name, value in zip(FEATURE_NAMES, values))


def log_summary(results: list[TrialResult], *, limit: int) -> list[TrialResult]:
    """Log the ``limit`` best trials and return them, best first."""

    ranked = sorted(results, key=lambda r: (r.lines, -r.games_lost), reverse=True)
    limited = ranked[: max(0, limit)]
    for rank, result in enumerate(limited, start=1):
        LOGGER.info(
            "#%d lines=%d lost=%d: %s",
            rank,
            result.lines,
            result.games_lost,
            _format_weights(result.weights),
        )
    return limited


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--candidates", type=int, default=10, help="Number of perturbed weight sets.")
    parser.add_argument("--ticks", type=int, default=300, help="Agent moves per trial.")
    parser.add_argument("--scale", type=float, default=0.5, help="Standard deviation of the noise.")
    parser.add_argument("--seed", type=int, default=0, help="Seed for pieces and perturbations.")
    parser.add_argument("--summary-limit", type=int, default=3, help="How many trials to report.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    config = GameConfig()
    rng = np.random.default_rng(args.seed)
    base = HeuristicWeights()
    candidates = [base] + [base.perturb(rng, args.scale) for _ in range(args.candidates)]

    results = [
        run_trial(weights, ticks=args.ticks, seed=args.seed, config=config)
        for weights in candidates
    ]
    log_summary(results, limit=args.summary_limit)


if __name__ == "__main__":
    main()
