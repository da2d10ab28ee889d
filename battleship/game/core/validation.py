"""Composable placement and fleet validation strategies.

Every rule is a standalone strategy returning ``(valid, reason)``. Strategies are
grouped into ordered pipelines that stop at the first failing rule, so adding a
rule never requires touching the existing ones.

Per-ship rules run against the placing player's own board as each ship is
staged, so later ships see the cells of earlier ones. Fleet rules run once per
submission over the accumulated length histogram and coordinate lists.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import combinations
from typing import Generic, Protocol, TypeVar

from battleship.game.core.board import Board
from battleship.game.core.errors import InvalidError
from battleship.game.core.models import (
    BOARD_SIZE,
    FLEET_COMPOSITION,
    MAX_SHIP_LENGTH,
    MIN_SHIP_LENGTH,
    Cell,
    Coordinate,
)

logger = logging.getLogger(__name__)

TContext = TypeVar("TContext", contravariant=True)
TCtx = TypeVar("TCtx")


@dataclass(frozen=True, slots=True)
class PlacementContext:
    """Input of per-ship strategies."""

    board: Board
    coordinates: tuple[Coordinate, ...]
    size: int = BOARD_SIZE


@dataclass(frozen=True, slots=True)
class FleetContext:
    """Input of fleet-level strategies."""

    ship_counts: dict[int, int]
    ship_coordinates: tuple[tuple[Coordinate, ...], ...]


class ValidationStrategy(Protocol[TContext]):
    """Single independent validation rule."""

    name: str

    def check(self, context: TContext) -> tuple[bool, str]:
        """Return ``(valid, reason)``; reason is empty when valid."""


def is_straight(coordinates: Sequence[Coordinate]) -> bool:
    """Return whether coordinates share exactly one axis."""
    if len(coordinates) <= 1:
        return True
    same_x = all(coord.x == coordinates[0].x for coord in coordinates)
    same_y = all(coord.y == coordinates[0].y for coord in coordinates)
    return same_x != same_y


def is_contiguous(coordinates: Sequence[Coordinate]) -> bool:
    """Return whether sorted coordinates advance by exactly one unit along their axis."""
    if len(coordinates) <= 1:
        return True
    same_x = all(coord.x == coordinates[0].x for coord in coordinates)
    if same_x:
        ordered = sorted(coordinates, key=lambda coord: coord.y)
        step = (0, 1)
    else:
        ordered = sorted(coordinates, key=lambda coord: coord.x)
        step = (1, 0)
    for a, b in zip(ordered, ordered[1:]):
        if (b.x - a.x, b.y - a.y) != step:
            return False
    return True


def are_adjacent(first: Coordinate, second: Coordinate) -> bool:
    """Return whether two distinct coordinates touch, diagonals included."""
    dx = abs(first.x - second.x)
    dy = abs(first.y - second.y)
    return dx <= 1 and dy <= 1 and (dx, dy) != (0, 0)


class ShipLengthValidationStrategy:
    name = "ship_length"

    def check(self, context: PlacementContext) -> tuple[bool, str]:
        if not MIN_SHIP_LENGTH <= len(context.coordinates) <= MAX_SHIP_LENGTH:
            return False, f"ship length must be {MIN_SHIP_LENGTH}-{MAX_SHIP_LENGTH}"
        return True, ""


class BoundsValidationStrategy:
    name = "bounds"

    def check(self, context: PlacementContext) -> tuple[bool, str]:
        for coord in context.coordinates:
            if not coord.is_valid(context.size):
                return False, "ship contains invalid coordinates"
        return True, ""


class StraightLineValidationStrategy:
    name = "straight_line"

    def check(self, context: PlacementContext) -> tuple[bool, str]:
        if not is_straight(context.coordinates):
            return False, "ship must be straight"
        return True, ""


class ContiguityValidationStrategy:
    name = "contiguity"

    def check(self, context: PlacementContext) -> tuple[bool, str]:
        if not is_contiguous(context.coordinates):
            return False, "ship must be contiguous"
        return True, ""


class OverlapValidationStrategy:
    name = "overlap"

    def check(self, context: PlacementContext) -> tuple[bool, str]:
        for coord in context.coordinates:
            if context.board.get(coord.x, coord.y) is Cell.SHIP:
                return False, "ships cannot overlap"
        return True, ""


class AdjacencyValidationStrategy:
    """Rejects ships touching an already placed ship, diagonals included."""

    name = "adjacency"

    def check(self, context: PlacementContext) -> tuple[bool, str]:
        for coord in context.coordinates:
            if context.board.is_adjacent_violation(coord.x, coord.y):
                return False, "ships cannot be adjacent"
        return True, ""


class UniquenessValidationStrategy:
    name = "uniqueness"

    def check(self, context: FleetContext) -> tuple[bool, str]:
        flat = [coord for ship in context.ship_coordinates for coord in ship]
        if len(flat) != len(set(flat)):
            return False, "duplicate coordinates in fleet"
        return True, ""


class ShipOverlapValidationStrategy:
    name = "ship_overlap"

    def check(self, context: FleetContext) -> tuple[bool, str]:
        for first, second in combinations(context.ship_coordinates, 2):
            if set(first) & set(second):
                return False, "ships cannot overlap"
        return True, ""


class ShipAdjacencyValidationStrategy:
    name = "ship_adjacency"

    def check(self, context: FleetContext) -> tuple[bool, str]:
        for first, second in combinations(context.ship_coordinates, 2):
            if any(are_adjacent(a, b) for a in first for b in second):
                return False, "ships cannot be adjacent"
        return True, ""


class FleetCompositionValidationStrategy:
    name = "fleet_composition"

    def check(self, context: FleetContext) -> tuple[bool, str]:
        counts = {length: count for length, count in context.ship_counts.items() if count}
        if counts == FLEET_COMPOSITION:
            return True, ""
        expected = _describe_lengths(FLEET_COMPOSITION)
        actual = _describe_lengths(counts) or "none"
        return False, f"invalid fleet composition: expected lengths {expected}, got {actual}"


def _describe_lengths(counts: dict[int, int]) -> str:
    lengths: list[str] = []
    for length in sorted(counts, reverse=True):
        lengths.extend([str(length)] * counts[length])
    return ",".join(lengths)


class ValidationPipeline(Generic[TCtx]):
    """Ordered strategy chain that short-circuits on the first failure."""

    def __init__(self, strategies: Sequence[ValidationStrategy[TCtx]]) -> None:
        self._strategies = tuple(strategies)

    @property
    def strategies(self) -> tuple[ValidationStrategy[TCtx], ...]:
        return self._strategies

    def check(self, context: TCtx) -> tuple[bool, str]:
        """Run strategies in order and return the first failure, if any."""
        for strategy in self._strategies:
            valid, reason = strategy.check(context)
            if not valid:
                logger.debug("validation_rejected strategy=%s reason=%s", strategy.name, reason)
                return False, reason
        return True, ""

    def validate(self, context: TCtx) -> None:
        """Raise ``InvalidError`` with the first failing strategy's reason."""
        valid, reason = self.check(context)
        if not valid:
            raise InvalidError(reason)

    def extended(self, *strategies: ValidationStrategy[TCtx]) -> ValidationPipeline[TCtx]:
        """Return a new pipeline with extra strategies appended."""
        return ValidationPipeline((*self._strategies, *strategies))


SHIP_PLACEMENT_PIPELINE: ValidationPipeline[PlacementContext] = ValidationPipeline(
    (
        ShipLengthValidationStrategy(),
        BoundsValidationStrategy(),
        StraightLineValidationStrategy(),
        ContiguityValidationStrategy(),
        OverlapValidationStrategy(),
        AdjacencyValidationStrategy(),
    )
)

FLEET_PIPELINE: ValidationPipeline[FleetContext] = ValidationPipeline(
    (
        UniquenessValidationStrategy(),
        ShipOverlapValidationStrategy(),
        ShipAdjacencyValidationStrategy(),
        FleetCompositionValidationStrategy(),
    )
)


def validate_coordinates(x: int, y: int, size: int = BOARD_SIZE) -> None:
    """Raise when (x, y) lies outside the board."""
    if not (0 <= x < size and 0 <= y < size):
        raise InvalidError("out of bounds")


def validate_ship_placement(
    board: Board,
    coordinates: Sequence[Coordinate],
    size: int = BOARD_SIZE,
    pipeline: ValidationPipeline[PlacementContext] = SHIP_PLACEMENT_PIPELINE,
) -> None:
    """Validate one candidate ship against the current own board."""
    if not coordinates:
        raise InvalidError("empty ship")
    pipeline.validate(PlacementContext(board=board, coordinates=tuple(coordinates), size=size))


def validate_fleet_composition(
    ship_counts: dict[int, int],
    ship_coordinates: Sequence[Sequence[Coordinate]],
    pipeline: ValidationPipeline[FleetContext] = FLEET_PIPELINE,
) -> None:
    """Validate a whole fleet submission."""
    pipeline.validate(
        FleetContext(
            ship_counts=dict(ship_counts),
            ship_coordinates=tuple(tuple(ship) for ship in ship_coordinates),
        )
    )
