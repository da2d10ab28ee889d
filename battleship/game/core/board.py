"""Board state representation and mutation helpers."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from battleship.game.core.models import BOARD_SIZE, Cell


def _zeroed(size: int) -> np.ndarray:
    return np.zeros(size * size, dtype=np.uint8)


@dataclass(slots=True, eq=False)
class Board:
    """Numpy-backed flat grid of cell codes in row-major order (index = y * size + x).

    ``get`` and ``set`` do not bounds-check; callers validate coordinates first.
    """

    size: int = BOARD_SIZE
    cells: np.ndarray = field(default_factory=lambda: _zeroed(BOARD_SIZE))

    def __post_init__(self) -> None:
        if self.cells.shape != (self.size * self.size,):
            raise ValueError(
                f"Expected {self.size * self.size} cells, got shape {self.cells.shape}."
            )

    @classmethod
    def empty(cls, size: int = BOARD_SIZE) -> Board:
        return cls(size=size, cells=_zeroed(size))

    @classmethod
    def from_codes(cls, codes: list[int], size: int = BOARD_SIZE) -> Board:
        """Build a board from wire cell codes."""
        if len(codes) != size * size:
            raise ValueError(f"Expected {size * size} cell codes, got {len(codes)}.")
        normalized = [int(Cell.from_code(code)) for code in codes]
        return cls(size=size, cells=np.array(normalized, dtype=np.uint8))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and bool(np.array_equal(self.cells, other.cells))

    def index(self, x: int, y: int) -> int:
        return y * self.size + x

    def in_bounds(self, x: int, y: int) -> bool:
        """Return whether the position lies on the board."""
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> Cell:
        return Cell(int(self.cells[self.index(x, y)]))

    def set(self, x: int, y: int, cell: Cell) -> None:
        self.cells[self.index(x, y)] = int(cell)

    def is_adjacent_violation(self, x: int, y: int) -> bool:
        """Return whether any of the 8 neighbours of (x, y) holds a ship."""
        grid = self.cells.reshape(self.size, self.size)
        window = grid[max(y - 1, 0) : y + 2, max(x - 1, 0) : x + 2]
        ships = int(np.count_nonzero(window == int(Cell.SHIP)))
        if grid[y, x] == int(Cell.SHIP):
            ships -= 1
        return ships > 0

    def count(self, cell: Cell) -> int:
        """Return number of cells currently in the given state."""
        return int(np.count_nonzero(self.cells == int(cell)))

    def copy(self) -> Board:
        return Board(size=self.size, cells=self.cells.copy())

    def codes(self) -> list[int]:
        """Return the cells as plain wire codes."""
        return [int(code) for code in self.cells.tolist()]
