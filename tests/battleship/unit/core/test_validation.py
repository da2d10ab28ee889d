import pytest

from battleship.game.core.board import Board
from battleship.game.core.errors import InvalidError
from battleship.game.core.models import Cell
from battleship.game.core.models import Coordinate as C
from battleship.game.core.validation import (
    FLEET_PIPELINE,
    SHIP_PLACEMENT_PIPELINE,
    FleetCompositionValidationStrategy,
    FleetContext,
    PlacementContext,
    ValidationPipeline,
    validate_coordinates,
    validate_fleet_composition,
    validate_ship_placement,
)


class _Recording:
    def __init__(self, name: str, valid: bool) -> None:
        self.name = name
        self._valid = valid
        self.calls = 0

    def check(self, context: PlacementContext) -> tuple[bool, str]:
        self.calls += 1
        return self._valid, "" if self._valid else f"{self.name} failed"


def _context(coords: list[C], board: Board | None = None) -> PlacementContext:
    return PlacementContext(board=board or Board.empty(), coordinates=tuple(coords))


def test_pipeline_short_circuits_on_first_failure() -> None:
    first = _Recording("first", True)
    second = _Recording("second", False)
    third = _Recording("third", True)
    pipeline = ValidationPipeline([first, second, third])

    assert pipeline.check(_context([C(0, 0), C(1, 0)])) == (False, "second failed")
    assert (first.calls, second.calls, third.calls) == (1, 1, 0)
    with pytest.raises(InvalidError, match="second failed"):
        pipeline.validate(_context([C(0, 0), C(1, 0)]))


def test_extended_pipeline_adds_rules_without_mutating_base() -> None:
    extra = _Recording("no_row_zero", False)
    extended = SHIP_PLACEMENT_PIPELINE.extended(extra)
    assert len(extended.strategies) == len(SHIP_PLACEMENT_PIPELINE.strategies) + 1
    assert SHIP_PLACEMENT_PIPELINE.check(_context([C(0, 0), C(1, 0)])) == (True, "")
    assert extended.check(_context([C(0, 0), C(1, 0)])) == (False, "no_row_zero failed")


@pytest.mark.parametrize(
    "coords,reason",
    [
        ([C(0, 0)], "ship length must be 2-5"),
        ([C(0, 0), C(1, 1)], "ship must be straight"),
        ([C(0, 0), C(0, 2)], "ship must be contiguous"),
    ],
)
def test_per_ship_shape_rules(coords: list[C], reason: str) -> None:
    assert SHIP_PLACEMENT_PIPELINE.check(_context(coords)) == (False, reason)


def test_overlap_and_adjacency_against_own_board() -> None:
    board = Board.empty()
    board.set(0, 0, Cell.SHIP)
    board.set(0, 1, Cell.SHIP)

    with pytest.raises(InvalidError, match="overlap"):
        validate_ship_placement(board, [C(0, 1), C(0, 2)])
    # (1,0)-(1,1) touches (0,0)-(0,1) orthogonally and diagonally.
    with pytest.raises(InvalidError, match="adjacent"):
        validate_ship_placement(board, [C(1, 0), C(1, 1)])
    validate_ship_placement(board, [C(2, 0), C(2, 1)])


def test_empty_candidate_is_rejected() -> None:
    with pytest.raises(InvalidError, match="empty ship"):
        validate_ship_placement(Board.empty(), [])


def test_fleet_pipeline_rules() -> None:
    carrier = [C(i, 0) for i in range(5)]
    battleship = [C(i, 2) for i in range(4)]
    cruiser = [C(i, 4) for i in range(3)]
    submarine = [C(i, 6) for i in range(3)]
    destroyer = [C(i, 8) for i in range(2)]
    ships = [carrier, battleship, cruiser, submarine, destroyer]
    validate_fleet_composition({5: 1, 4: 1, 3: 2, 2: 1}, ships)

    with pytest.raises(InvalidError, match="duplicate"):
        validate_fleet_composition({5: 1, 4: 1, 3: 2, 2: 1}, [*ships[:4], [C(0, 0), C(0, 1)]])

    ok, reason = FLEET_PIPELINE.check(
        FleetContext(ship_counts={5: 1, 4: 1, 3: 1, 2: 1}, ship_coordinates=tuple(map(tuple, ships[:3] + ships[4:])))
    )
    assert not ok
    assert reason == "invalid fleet composition: expected lengths 5,4,3,3,2, got 5,4,3,2"


def test_fleet_composition_ignores_zero_counts() -> None:
    strategy = FleetCompositionValidationStrategy()
    context = FleetContext(ship_counts={5: 1, 4: 1, 3: 2, 2: 1, 6: 0}, ship_coordinates=())
    assert strategy.check(context) == (True, "")
    empty = FleetContext(ship_counts={}, ship_coordinates=())
    assert strategy.check(empty)[1].endswith("got none")


def test_validate_coordinates_bounds() -> None:
    validate_coordinates(0, 9)
    with pytest.raises(InvalidError, match="out of bounds"):
        validate_coordinates(10, 0)
    with pytest.raises(InvalidError):
        validate_coordinates(0, -1)
