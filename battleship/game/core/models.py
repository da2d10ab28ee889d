"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum

from battleship.game.core.errors import InvalidError

BOARD_SIZE = 10
MIN_SHIP_LENGTH = 2
MAX_SHIP_LENGTH = 5

# Ship length -> number of ships of that length in a complete fleet.
FLEET_COMPOSITION: dict[int, int] = {
    5: 1,
    4: 1,
    3: 2,
    2: 1,
}
FLEET_CELL_COUNT = sum(length * count for length, count in FLEET_COMPOSITION.items())


class Cell(IntEnum):
    """State of a single board cell, valued by its wire code."""

    EMPTY = 0
    SHIP = 1
    HIT = 2
    MISS = 3
    PENDING = 4

    @classmethod
    def from_code(cls, value: int) -> Cell:
        """Map a wire code to a cell; unknown codes read as empty."""
        try:
            return cls(value)
        except ValueError:
            return cls.EMPTY


class ShotOutcome(StrEnum):
    """Result label of a resolved shot."""

    HIT = "hit"
    MISS = "miss"


@dataclass(frozen=True, slots=True, order=True)
class Coordinate:
    """Board coordinate; x is the column and y the row."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if not (0 <= self.x < BOARD_SIZE and 0 <= self.y < BOARD_SIZE):
            raise InvalidError("coordinate out of bounds")

    def is_valid(self, size: int = BOARD_SIZE) -> bool:
        return 0 <= self.x < size and 0 <= self.y < size

    def index(self, size: int = BOARD_SIZE) -> int:
        """Row-major index of this coordinate."""
        return self.y * size + self.x
