"""A player's private board and placement lifecycle."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field

from battleship.game.core.board import Board
from battleship.game.core.errors import InvalidError
from battleship.game.core.fleet import parse_ship_coords
from battleship.game.core.models import BOARD_SIZE, Cell, Coordinate
from battleship.game.core.validation import validate_fleet_composition, validate_ship_placement

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PlayerBoard:
    """Own-board layout, remaining ship cells and placement flag of one player.

    Only the owning player and shot resolution ever touch an instance.
    """

    own: Board = field(default_factory=Board.empty)
    ships: int = 0
    placed: bool = False

    def place_ships(self, groups: Sequence[str], *, strict: bool = True) -> None:
        """Validate and place a full fleet submission.

        Ships are staged on a scratch copy of the own board; the board is only
        replaced once every ship and the fleet composition have passed.
        """
        if self.placed:
            raise InvalidError("already placed")

        scratch = self.own.copy()
        ship_counts: Counter[int] = Counter()
        all_coordinates: list[list[Coordinate]] = []

        for group in groups:
            coords = parse_ship_coords(group, strict=strict)
            if not coords:
                continue
            validate_ship_placement(scratch, coords, BOARD_SIZE)
            for coord in coords:
                scratch.set(coord.x, coord.y, Cell.SHIP)
            ship_counts[len(coords)] += 1
            all_coordinates.append(coords)

        if not all_coordinates:
            raise InvalidError("no ships")

        validate_fleet_composition(dict(ship_counts), all_coordinates)

        self.own = scratch
        self.ships = sum(len(coords) for coords in all_coordinates)
        self.placed = True
        logger.debug("ships_placed ships=%d cells=%d", len(all_coordinates), self.ships)

    @property
    def board(self) -> Board:
        return self.own

    @property
    def ship_count(self) -> int:
        """Number of ship cells not yet hit."""
        return self.ships

    def is_placed(self) -> bool:
        return self.placed

    def decrement_ships(self) -> None:
        if self.ships > 0:
            self.ships -= 1
