import numpy as np
import pytest

from battleship.game.core.board import Board
from battleship.game.core.models import Cell


def test_board_is_row_major_and_starts_empty() -> None:
    board = Board.empty()
    assert board.count(Cell.EMPTY) == 100
    board.set(3, 2, Cell.SHIP)
    assert board.get(3, 2) is Cell.SHIP
    assert int(board.cells[23]) == int(Cell.SHIP)
    assert board.codes()[23] == 1


def test_adjacency_violation_checks_all_eight_neighbours() -> None:
    board = Board.empty()
    board.set(5, 5, Cell.SHIP)
    for x, y in [(4, 4), (5, 4), (6, 4), (4, 5), (6, 5), (4, 6), (5, 6), (6, 6)]:
        assert board.is_adjacent_violation(x, y)
    assert not board.is_adjacent_violation(5, 7)
    assert not board.is_adjacent_violation(7, 7)
    # The cell itself is not its own neighbour.
    assert not board.is_adjacent_violation(5, 5)


def test_adjacency_violation_clamps_at_edges() -> None:
    board = Board.empty()
    board.set(0, 1, Cell.SHIP)
    board.set(9, 8, Cell.SHIP)
    assert board.is_adjacent_violation(0, 0)
    assert board.is_adjacent_violation(9, 9)
    assert not board.is_adjacent_violation(9, 0)


def test_adjacency_ignores_non_ship_states() -> None:
    board = Board.empty()
    board.set(1, 1, Cell.HIT)
    board.set(3, 3, Cell.MISS)
    assert not board.is_adjacent_violation(2, 2)


def test_copy_is_independent_and_equality_compares_cells() -> None:
    board = Board.empty()
    clone = board.copy()
    clone.set(0, 0, Cell.SHIP)
    assert board.get(0, 0) is Cell.EMPTY
    assert board != clone
    board.set(0, 0, Cell.SHIP)
    assert board == clone


def test_from_codes_normalizes_unknown_codes() -> None:
    codes = [0] * 100
    codes[0] = 2
    codes[1] = 9
    board = Board.from_codes(codes)
    assert board.get(0, 0) is Cell.HIT
    assert board.get(1, 0) is Cell.EMPTY
    assert board.in_bounds(9, 9)
    assert not board.in_bounds(10, 0)


def test_board_rejects_mis_shaped_cells() -> None:
    with pytest.raises(ValueError, match="Expected 100 cells"):
        Board(size=10, cells=np.ones(99, dtype=np.uint8))
