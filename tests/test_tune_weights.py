import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from examples.tune_weights import TrialResult, log_summary, run_trial
from tetrisbot.config import GameConfig
from tetrisbot.heuristic import HeuristicWeights
from tetrisbot.modes import Game


def test_log_summary_limits_rows_and_output(caplog):
    strong = TrialResult(weights=HeuristicWeights(), lines=12, games_lost=0)
    weak = TrialResult(weights=HeuristicWeights(lines_cleared=-3.0), lines=1, games_lost=2)

    with caplog.at_level(logging.INFO, logger="examples.tune_weights"):
        summary = log_summary([weak, strong], limit=1)

    assert summary == [strong]
    message = "".join(caplog.messages)
    assert "lines=12" in message
    assert "lines=1 " not in message


def test_run_trial_is_deterministic_for_a_seed():
    config = GameConfig()
    first = run_trial(HeuristicWeights(), ticks=40, seed=5, config=config)
    second = run_trial(HeuristicWeights(), ticks=40, seed=5, config=config)
    assert first == second
    assert first.lines >= 0


def test_run_trial_counts_lines_across_resets():
    config = GameConfig()
    result = run_trial(HeuristicWeights(), ticks=400, seed=11, config=config)

    replay = Game(config, seed=11, agent=True, weights=HeuristicWeights())
    for _ in range(400):
        replay.step()

    assert result.lines == replay.state.total_lines
    assert result.games_lost == replay.state.games
    assert result.lines >= replay.state.lines
