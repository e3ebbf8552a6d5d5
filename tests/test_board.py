from __future__ import annotations

import pytest

from tetrisbot.board import Board
from tetrisbot.tetromino import TetrominoType


def test_index_of_is_a_bijection_over_the_grid() -> None:
    board = Board()
    seen = set()
    for row in range(board.height):
        for col in range(board.width):
            index = board.index_of(row, col)
            assert index is not None
            assert 0 <= index < board.width * board.height
            assert board.row_col(index) == (row, col)
            seen.add(index)
    assert seen == set(range(board.size))


@pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (20, 0), (0, 10), (-1, -1), (20, 10)])
def test_index_of_rejects_out_of_bounds(row: int, col: int) -> None:
    assert Board().index_of(row, col) is None


def test_dimensions_are_read_only() -> None:
    board = Board(8, 12)
    assert (board.width, board.height, board.size) == (8, 12, 96)
    with pytest.raises(AttributeError):
        board.width = 5  # type: ignore[misc]


def test_cell_mutators_and_grid_copy() -> None:
    board = Board()
    index = board.index_of(19, 0)
    board.set_occupied(index, TetrominoType.I)
    assert board.is_occupied(index)
    assert board.piece_type_at(index) == TetrominoType.I
    assert board.as_grid()[19][0] == 1

    board.clear(index)
    assert not board.is_occupied(index)
    assert board.occupied_count() == 0


def test_find_full_row_and_clear_row_shift_column_contents() -> None:
    board = Board()
    for row in range(board.height):
        if row == 5:
            continue
        board.set_occupied(board.index_of(row, row % board.width), TetrominoType.J)
    board.set_occupied(board.index_of(4, 7), TetrominoType.T)
    for col in range(board.width):
        board.set_occupied(board.index_of(5, col), TetrominoType.Z)

    assert board.find_full_row() == 5

    before_rows = board.rows().copy()
    before_types = board.piece_types.reshape(board.height, board.width).copy()

    board.clear_row(5)

    after_rows = board.rows()
    after_types = board.piece_types.reshape(board.height, board.width)
    assert (after_rows[5] == before_rows[4]).all()
    assert (after_types[5][after_rows[5]] == before_types[4][before_rows[4]]).all()
    assert (after_rows[6:] == before_rows[6:]).all()
    assert not after_rows[0].any()
    assert board.find_full_row() is None


def test_clear_full_rows_removes_every_complete_row() -> None:
    board = Board()
    for row in (18, 19):
        for col in range(board.width):
            board.set_occupied(board.index_of(row, col), TetrominoType.O)
    board.set_occupied(board.index_of(17, 0), TetrominoType.L)

    assert board.clear_full_rows() == 2
    assert board.occupied_count() == 1
    bottom_left = board.index_of(19, 0)
    assert board.is_occupied(bottom_left)
    assert board.piece_type_at(bottom_left) == TetrominoType.L


def test_cells_iterates_in_index_order() -> None:
    board = Board(4, 4)
    board.set_occupied(5, TetrominoType.S)
    cells = list(board.cells())
    assert [c.index for c in cells] == list(range(16))
    assert (cells[5].row, cells[5].col, cells[5].occupied) == (1, 1, True)
    assert cells[5].piece_type == TetrominoType.S


def test_pixel_position_is_offset_by_origin() -> None:
    board = Board()
    assert board.pixel_position(2, 3, 32, (90.0, 80.0)) == (90.0 + 96, 80.0 + 64)
