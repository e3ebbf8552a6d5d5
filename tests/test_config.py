from __future__ import annotations

import argparse

import pytest

from tetrisbot.config import GameConfig
from tetrisbot.game_state import GameState


def test_defaults_match_standard_board() -> None:
    config = GameConfig()
    assert (config.width, config.height) == (10, 20)
    assert config.tick_interval == 1.0
    assert config.debounce == 0.1


@pytest.mark.parametrize(
    "kwargs",
    [{"width": 3}, {"height": 2}, {"tick_interval": 0}, {"debounce": -0.5}],
)
def test_invalid_values_raise(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_from_args_keeps_defaults_for_missing_options() -> None:
    args = argparse.Namespace(width=12, height=None, tick=0.25)
    config = GameConfig.from_args(args)
    assert (config.width, config.height, config.tick_interval) == (12, 20, 0.25)


def test_state_uses_configured_dimensions() -> None:
    state = GameState(config=GameConfig(width=6, height=8), seed=1)
    assert (state.board.width, state.board.height) == (6, 8)
    assert state.active.anchor_col == 1
