from __future__ import annotations

import numpy as np
import pytest

from tetrisbot.board import Board
from tetrisbot.heuristic import (
    FEAT_DIM,
    HeuristicScorer,
    HeuristicWeights,
    cell_features,
    completes_line,
)
from tetrisbot.search import Placement, enumerate_placements
from tetrisbot.tetromino import Tetromino, TetrominoType


def _bottom_row_gap_board() -> Board:
    board = Board()
    for col in range(4, board.width):
        board.set_occupied(board.index_of(19, col), TetrominoType.J)
    return board


BOTTOM_LEFT_I = (190, 191, 192, 193)


def test_line_completing_placement_scores_lines_weight_only() -> None:
    board = _bottom_row_gap_board()
    zeros = HeuristicWeights.from_sequence([0.0] * FEAT_DIM)

    scorer = HeuristicScorer(zeros.with_only(lines_cleared=1.0))
    assert scorer.score(board, BOTTOM_LEFT_I) == pytest.approx(1.0)

    scorer = HeuristicScorer(zeros)
    assert scorer.score(board, BOTTOM_LEFT_I) == pytest.approx(0.0)


def test_completes_line_requires_every_column() -> None:
    board = _bottom_row_gap_board()
    assert completes_line(board, BOTTOM_LEFT_I)
    assert not completes_line(board, (180, 181, 182, 183))
    assert not completes_line(Board(), BOTTOM_LEFT_I)


def test_cell_features_on_wall_and_stack() -> None:
    board = Board()
    corner = board.index_of(19, 0)
    assert cell_features(board, corner).tolist() == [1.0, 0.0, 0.0, 19.0]

    board.set_occupied(board.index_of(19, 1), TetrominoType.O)
    assert cell_features(board, corner).tolist() == [1.0, 1.0, 0.0, 19.0]

    board.set_occupied(board.index_of(19, 5), TetrominoType.O)
    board.set_occupied(board.index_of(18, 6), TetrominoType.O)
    above = board.index_of(18, 5)
    assert cell_features(board, above).tolist() == [0.0, 2.0, 1.0, 18.0]


def test_default_weights_score_flat_i_on_floor() -> None:
    scorer = HeuristicScorer()
    # One wall cell (0.5) plus rows 4 * 19 at weight 1.0.
    assert scorer.score(Board(), BOTTOM_LEFT_I) == pytest.approx(76.5)


def test_default_weights_prefer_deeper_placements() -> None:
    # Rows grow downward, so a positive height weight penalises high stacks.
    assert HeuristicWeights().height > 0
    scorer = HeuristicScorer()
    board = Board()
    one_row_up = (180, 181, 182, 183)
    assert scorer.score(board, BOTTOM_LEFT_I) > scorer.score(board, one_row_up)

    best = scorer.best(board, enumerate_placements(board, Tetromino.spawn(TetrominoType.I, board)))
    assert best is not None
    assert all(index >= 190 for index in best.placement.positions)


def test_reassigned_weights_apply_to_cell_scores() -> None:
    scorer = HeuristicScorer()
    scorer.weights = HeuristicWeights().with_only(height=0.0, wall_contact=2.0)
    assert scorer.score(Board(), BOTTOM_LEFT_I) == pytest.approx(2.0)


def test_cell_scores_are_memoised_within_a_pass() -> None:
    board = Board()
    scorer = HeuristicScorer()
    cache = {190: 100.0}
    score = scorer.score(board, BOTTOM_LEFT_I, cache)
    assert set(cache) == set(BOTTOM_LEFT_I)
    # The seeded value replaces the real 19.5 for the corner cell.
    assert score == pytest.approx(100.0 + 3 * 19.0)


def test_best_keeps_first_of_equal_scores() -> None:
    board = Board()
    piece = Tetromino.spawn(TetrominoType.O, board)
    best = HeuristicScorer().best(board, enumerate_placements(board, piece))
    assert best is not None
    # Hugging either wall scores the same; the left one is found first.
    assert (best.placement.rotation, best.placement.column) == (0, -1)
    assert best.score == pytest.approx(75.0)


def test_best_prefers_completing_a_line() -> None:
    board = _bottom_row_gap_board()
    piece = Tetromino.spawn(TetrominoType.I, board)
    best = HeuristicScorer().best(board, enumerate_placements(board, piece))
    assert best is not None
    assert best.placement.positions == BOTTOM_LEFT_I


def test_best_of_nothing_is_none() -> None:
    assert HeuristicScorer().best(Board(), []) is None


def test_evaluate_pairs_each_placement_with_score() -> None:
    board = Board()
    placements = [
        Placement(rotation=1, column=0, row=18, positions=BOTTOM_LEFT_I),
        Placement(rotation=1, column=0, row=17, positions=(180, 181, 182, 183)),
    ]
    evaluations = HeuristicScorer().evaluate(board, placements)
    assert [e.placement for e in evaluations] == placements
    assert evaluations[0].score > evaluations[1].score


def test_perturb_returns_new_weights() -> None:
    base = HeuristicWeights()
    rng = np.random.default_rng(0)

    changed = base.perturb(rng, scale=0.5)
    assert changed != base
    assert base.as_array().tolist() == [10.0, 0.5, 1.0, 0.5, 1.0]

    single = base.perturb(rng, scale=0.5, index=2)
    diff = single.as_array() - base.as_array()
    assert diff[2] != 0.0
    assert np.count_nonzero(diff) == 1


def test_from_sequence_requires_five_values() -> None:
    with pytest.raises(ValueError):
        HeuristicWeights.from_sequence([1.0, 2.0])
