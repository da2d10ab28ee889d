"""Fleet submission codec and random fleet construction."""

from __future__ import annotations

import random
from collections.abc import Iterable, Sequence

from battleship.game.core.errors import InvalidError
from battleship.game.core.models import BOARD_SIZE, FLEET_COMPOSITION, Coordinate
from battleship.game.core.ships import Fleet, Ship


def parse_ship_coords(group: str, *, strict: bool = True) -> list[Coordinate]:
    """Parse one ``"x,y;x,y"`` ship group.

    Blank pairs are skipped. Malformed or off-board pairs raise ``InvalidError`` in
    strict mode and are dropped otherwise.
    """
    coords: list[Coordinate] = []
    for raw_pair in group.split(";"):
        pair = raw_pair.strip()
        if not pair:
            continue
        coord = _parse_pair(pair)
        if coord is None:
            if strict:
                raise InvalidError(f"malformed coordinate pair '{pair}'")
            continue
        coords.append(coord)
    return coords


def _parse_pair(pair: str) -> Coordinate | None:
    parts = pair.split(",")
    if len(parts) != 2:
        return None
    try:
        x, y = int(parts[0].strip()), int(parts[1].strip())
        return Coordinate(x, y)
    except ValueError:
        # Covers both int() failures and out-of-range coordinates.
        return None


def encode_ship(coordinates: Iterable[Coordinate]) -> str:
    """Encode coordinates into the ship submission format."""
    return ";".join(f"{coord.x},{coord.y}" for coord in coordinates)


def encode_fleet(fleet: Fleet) -> list[str]:
    """Encode a fleet as one submission string per ship."""
    return [encode_ship(ship.coordinates) for ship in fleet.ships]


def ship_lengths() -> list[int]:
    """Return the required ship lengths, longest first."""
    lengths: list[int] = []
    for length in sorted(FLEET_COMPOSITION, reverse=True):
        lengths.extend([length] * FLEET_COMPOSITION[length])
    return lengths


def random_fleet(rng: random.Random, size: int = BOARD_SIZE) -> Fleet:
    """Generate a random valid fleet with non-touching ships."""
    for _ in range(400):
        generated = _generate_non_touching_fleet(rng, size)
        if generated is not None:
            return Fleet(generated)
    raise RuntimeError("Failed to generate random fleet placement.")


def _generate_non_touching_fleet(rng: random.Random, size: int) -> list[Ship] | None:
    occupied: set[tuple[int, int]] = set()
    ships: list[Ship] = []
    for length in ship_lengths():
        candidates = _candidate_runs(length, size, occupied)
        if not candidates:
            return None
        cells = rng.choice(candidates)
        ships.append(Ship(tuple(Coordinate(x, y) for x, y in cells)))
        occupied.update(cells)
    return ships


def _candidate_runs(
    length: int, size: int, occupied: set[tuple[int, int]]
) -> list[Sequence[tuple[int, int]]]:
    candidates: list[Sequence[tuple[int, int]]] = []
    for horizontal in (True, False):
        max_x = size - length + 1 if horizontal else size
        max_y = size if horizontal else size - length + 1
        for y in range(max_y):
            for x in range(max_x):
                if horizontal:
                    cells = [(x + i, y) for i in range(length)]
                else:
                    cells = [(x, y + i) for i in range(length)]
                if _touches_existing(cells, occupied, size):
                    continue
                candidates.append(cells)
    return candidates


def _touches_existing(
    cells: Sequence[tuple[int, int]], occupied: set[tuple[int, int]], size: int
) -> bool:
    for cx, cy in cells:
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                nx = cx + dx
                ny = cy + dy
                if not (0 <= nx < size and 0 <= ny < size):
                    continue
                if (nx, ny) in occupied:
                    return True
    return False
