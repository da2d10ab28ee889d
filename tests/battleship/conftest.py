from __future__ import annotations

import logging
import random

import pytest

from battleship.game.app.events import EventBus, RecordingSink
from battleship.game.app.identity import ContextIdentityProvider
from battleship.game.app.service import BattleshipService, create_service
from battleship.game.core.keys import PlayerKey
from battleship.game.core.match import Match
from battleship.game.infra.config import GameSettings
from battleship.game.infra.logging import shutdown_logging

# Ships on rows 0, 2, 4, 6 and 8; odd rows stay empty.
VALID_FLEET_GROUPS: tuple[str, ...] = (
    "0,0;1,0;2,0;3,0;4,0",
    "0,2;1,2;2,2;3,2",
    "0,4;1,4;2,4",
    "0,6;1,6;2,6",
    "0,8;1,8",
)


def make_key(seed: int) -> PlayerKey:
    return PlayerKey(bytes([seed]) * 32)


@pytest.fixture
def fleet_cells() -> list[tuple[int, int]]:
    """Every ship cell of the reference fleet."""
    cells: list[tuple[int, int]] = []
    for group in VALID_FLEET_GROUPS:
        for pair in group.split(";"):
            x, y = pair.split(",")
            cells.append((int(x), int(y)))
    return cells


@pytest.fixture
def valid_fleet_groups() -> list[str]:
    return list(VALID_FLEET_GROUPS)


@pytest.fixture
def alice() -> PlayerKey:
    return make_key(1)


@pytest.fixture
def bob() -> PlayerKey:
    return make_key(2)


@pytest.fixture
def carol() -> PlayerKey:
    return make_key(3)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def placed_match(alice: PlayerKey, bob: PlayerKey) -> Match:
    match = Match.create("match-1", alice, bob)
    match.mark_placed(alice)
    match.mark_placed(bob)
    return match


@pytest.fixture
def identity() -> ContextIdentityProvider:
    return ContextIdentityProvider()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorded_events(event_bus: EventBus) -> RecordingSink:
    return RecordingSink(event_bus)


@pytest.fixture
def service_factory(identity: ContextIdentityProvider, event_bus: EventBus):
    def _make(settings: GameSettings | None = None) -> BattleshipService:
        return create_service(
            settings or GameSettings(),
            identity=identity,
            events=event_bus,
            clock_ms=lambda: 1_700_000_000_000,
        )

    return _make


@pytest.fixture
def service(service_factory) -> BattleshipService:
    return service_factory()


@pytest.fixture
def started_match(
    service: BattleshipService,
    identity: ContextIdentityProvider,
    alice: PlayerKey,
    bob: PlayerKey,
    valid_fleet_groups: list[str],
) -> str:
    """Match id where both players placed the reference fleet; alice to move."""
    with identity.acting_as(alice):
        match_id = service.create_match(bob.to_base58())
        service.place_ships(match_id, valid_fleet_groups)
    with identity.acting_as(bob):
        service.place_ships(match_id, valid_fleet_groups)
    return match_id


@pytest.fixture
def restore_root_logging():
    """Undo root logger changes made by logging bootstrap under test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)
