from __future__ import annotations

import numpy as np
import pytest

from conftest import BLINKER_VERTICAL, board_from, grid
from lifeboard.board import Board, CellState
from lifeboard.errors import CorruptState, InvalidInput


def test_from_binary_grid_sets_dimensions_and_starts_at_generation_zero() -> None:
    board = board_from("0110", "1001")

    assert (board.width, board.height) == (4, 2)
    assert board.generation == 0
    assert board.id
    assert board.cell(1, 0) is CellState.ALIVE
    assert board.cell(0, 0) is CellState.DEAD
    assert board.cell(3, 1) is CellState.ALIVE


def test_fresh_boards_get_distinct_ids() -> None:
    assert board_from("1").id != board_from("1").id


@pytest.mark.parametrize(
    "rows",
    [
        [],
        [[]],
        [[0, 1], [1]],
        [[0, 2]],
        [[0, -1]],
        [[True, False]],
        [[1.0, 0.0]],
        [["1", "0"]],
    ],
)
def test_from_binary_grid_rejects_malformed_input(rows: list[list[int]]) -> None:
    with pytest.raises(InvalidInput):
        Board.from_binary_grid(rows)


def test_to_binary_grid_is_row_major_view() -> None:
    rows = grid("100", "011")
    board = Board.from_binary_grid(rows)

    assert board.to_binary_grid() == rows
    assert board.generation == 0


def test_serialize_writes_header_then_rows() -> None:
    board = board_from("010", "001", "111").with_generation(7)

    assert board.serialize() == "3,3,7\n010\n001\n111\n"
    assert board.serialize() == board.serialize()


def test_deserialize_round_trips_and_takes_supplied_id() -> None:
    original = board_from("0110", "1001", "0000").with_generation(12)

    restored = Board.deserialize("abc", original.serialize())

    assert restored.id == "abc"
    assert restored.generation == 12
    assert restored.to_binary_grid() == original.to_binary_grid()


def test_deserialize_accepts_crlf_and_trailing_blank_lines() -> None:
    restored = Board.deserialize("x", "2,2,0\r\n10\r\n01\r\n\r\n")

    assert restored.to_binary_grid() == [[1, 0], [0, 1]]


@pytest.mark.parametrize(
    "record",
    [
        "",
        "3,3\n000\n000\n000\n",
        "a,b,c\n0\n",
        "0,1,0\n\n",
        "1,1,-1\n0\n",
        "3,2,0\n000\n",
        "3,2,0\n000\n00\n",
        "3,2,0\n000\n0000\n",
        "2,1,0\n0x\n",
        "2,1,0\n01\n10\n",
        "1_0,1,0\n0000000000\n",
        " +2 ,1,0\n00\n",
        "\uff12,1,0\n00\n",
        "2,1,0\n\u0661\u0660\n",
    ],
)
def test_deserialize_rejects_corrupt_records(record: str) -> None:
    with pytest.raises(CorruptState):
        Board.deserialize("bad", record)


def test_clone_is_equal_but_distinct() -> None:
    board = board_from(*BLINKER_VERTICAL)

    copy = board.clone()

    assert copy == board
    assert copy is not board
    assert not np.shares_memory(copy.cells, board.cells)
    assert copy.id == board.id
    assert copy.created_at == board.created_at


def test_with_generation_leaves_original_untouched() -> None:
    board = board_from("1")

    rewritten = board.with_generation(5)

    assert rewritten.generation == 5
    assert board.generation == 0


def test_fingerprint_and_live_count() -> None:
    board = board_from("010", "110")

    assert board.fingerprint() == "010110"
    assert board.live_count() == 3
    assert not board.is_empty()
    assert Board.blank(3, 2).is_empty()


def test_cell_out_of_bounds_raises() -> None:
    board = Board.blank(2, 2)

    with pytest.raises(IndexError):
        board.cell(2, 0)
