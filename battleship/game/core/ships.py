"""Single-ship geometry and fleet composition."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from battleship.game.core.errors import InvalidError
from battleship.game.core.models import MAX_SHIP_LENGTH, MIN_SHIP_LENGTH, Coordinate
from battleship.game.core.validation import (
    are_adjacent,
    is_contiguous,
    is_straight,
    validate_fleet_composition,
)


@dataclass(frozen=True, slots=True)
class Ship:
    """Straight, contiguous run of 2-5 coordinates."""

    coordinates: tuple[Coordinate, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "coordinates", tuple(self.coordinates))
        self._validate()

    def _validate(self) -> None:
        if not self.coordinates:
            raise InvalidError("ship cannot be empty")
        if not MIN_SHIP_LENGTH <= len(self.coordinates) <= MAX_SHIP_LENGTH:
            raise InvalidError(f"ship length must be {MIN_SHIP_LENGTH}-{MAX_SHIP_LENGTH}")
        if not all(coord.is_valid() for coord in self.coordinates):
            raise InvalidError("ship contains invalid coordinates")
        if not self.is_straight():
            raise InvalidError("ship must be straight")
        if not self.is_contiguous():
            raise InvalidError("ship must be contiguous")

    @property
    def length(self) -> int:
        return len(self.coordinates)

    def is_straight(self) -> bool:
        return is_straight(self.coordinates)

    def is_contiguous(self) -> bool:
        return is_contiguous(self.coordinates)

    def overlaps_with(self, other: Ship) -> bool:
        """Return whether both ships share a coordinate."""
        return any(a == b for a in self.coordinates for b in other.coordinates)

    def is_adjacent_to(self, other: Ship) -> bool:
        """Return whether any cells of both ships touch, diagonals included."""
        return any(are_adjacent(a, b) for a in self.coordinates for b in other.coordinates)


@dataclass(frozen=True, slots=True)
class Fleet:
    """The five ships a player places, validated as a whole."""

    ships: tuple[Ship, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ships", tuple(self.ships))
        validate_fleet_composition(
            self.ship_counts(),
            [ship.coordinates for ship in self.ships],
        )

    def ship_counts(self) -> dict[int, int]:
        """Return ship length histogram."""
        return dict(Counter(ship.length for ship in self.ships))

    def total_ships(self) -> int:
        return len(self.ships)

    def total_cells(self) -> int:
        return sum(ship.length for ship in self.ships)

    def coordinates(self) -> list[Coordinate]:
        """Return every occupied coordinate, ship by ship."""
        return [coord for ship in self.ships for coord in ship.coordinates]
