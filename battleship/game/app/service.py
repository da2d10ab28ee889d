"""Client-facing match operations.

Each call resolves the caller through the identity provider, works on copies of
the match and of the caller's private board, and commits both only after every
rule has passed. Domain failures propagate to the caller as ``GameError``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager

from battleship.game.app.events import (
    EventBus,
    MatchCreated,
    MatchEnded,
    ShipsPlaced,
    ShotFired,
    ShotProposed,
    Winner,
)
from battleship.game.app.identity import ContextIdentityProvider, IdentityProvider
from battleship.game.app.registry import MatchIdGenerator, MatchRegistry
from battleship.game.app.store import PrivateBoardStore
from battleship.game.app.views import BoardView, own_board_view, shots_view
from battleship.game.core.errors import FinishedError, ForbiddenError, GameError, InvalidError, NotFoundError
from battleship.game.core.keys import PlayerKey
from battleship.game.core.match import Match
from battleship.game.core.shot_resolution import resolve_shot
from battleship.game.infra.config import GameSettings

logger = logging.getLogger(__name__)


@contextmanager
def _rejections_logged(operation: str, match_id: str | None = None) -> Iterator[None]:
    try:
        yield
    except GameError as exc:
        logger.warning(
            "operation_rejected op=%s match_id=%s kind=%s reason=%s",
            operation,
            match_id,
            exc.kind,
            exc.message,
            extra={"op": operation, "match_id": match_id, "kind": exc.kind},
        )
        raise


class BattleshipService:
    """Match lifecycle operations on behalf of the current caller."""

    def __init__(
        self,
        *,
        registry: MatchRegistry,
        store: PrivateBoardStore,
        identity: IdentityProvider,
        events: EventBus,
        settings: GameSettings,
        ids: MatchIdGenerator | None = None,
    ) -> None:
        self._registry = registry
        self._store = store
        self._identity = identity
        self._events = events
        self._settings = settings
        self._ids = ids or MatchIdGenerator()

    @property
    def settings(self) -> GameSettings:
        return self._settings

    def create_match(self, player2: str) -> str:
        """Create a match between the caller and the base58-encoded opponent."""
        with _rejections_logged("create_match"):
            caller = self._identity.current_player()
            opponent = PlayerKey.from_base58(player2)
            match = Match.create(
                self._ids.next_id(),
                caller,
                opponent,
                allow_repeat_shots=self._settings.allow_repeat_shots,
            )
            self._registry.add(match)
        logger.info("match_created match_id=%s", match.id, extra={"match_id": match.id})
        self._events.publish(MatchCreated(match_id=match.id))
        return match.id

    def place_ships(self, match_id: str, ships: Sequence[str]) -> None:
        """Place the caller's fleet for the match."""
        with _rejections_logged("place_ships", match_id), self._registry.lock(match_id):
            match = self._registry.get(match_id)
            if match.is_finished():
                raise FinishedError()
            caller = self._identity.current_player()
            if not match.is_player(caller):
                raise ForbiddenError("not a player")

            namespace = self._store.namespace_for(caller)
            player_board = namespace.get_or_default(match_id)
            player_board.place_ships(ships, strict=self._settings.strict_ship_parsing)
            match.mark_placed(caller)

            namespace.insert(match_id, player_board)
            self._registry.commit(match)
        both_placed = match.both_players_placed()
        logger.info(
            "ships_placed match_id=%s both_placed=%s",
            match_id,
            both_placed,
            extra={"match_id": match_id, "both_placed": both_placed},
        )
        self._events.publish(ShipsPlaced(match_id=match_id))

    def propose_shot(self, match_id: str, x: int, y: int) -> None:
        """Propose a shot at (x, y) on the opponent's board."""
        with _rejections_logged("propose_shot", match_id), self._registry.lock(match_id):
            match = self._registry.get(match_id)
            caller = self._identity.current_player()
            match.propose_shot(caller, x, y)
            self._registry.commit(match)
        logger.info(
            "shot_proposed match_id=%s x=%d y=%d",
            match_id,
            x,
            y,
            extra={"match_id": match_id, "x": x, "y": y},
        )
        self._events.publish(ShotProposed(match_id=match_id, x=x, y=y))

    def acknowledge_shot(self, match_id: str) -> str:
        """Let the pending target resolve the shot against their own board."""
        return self._acknowledge("acknowledge_shot", match_id)

    def acknowledge_shot_handler(self, match_id: str, x: int, y: int) -> str:
        """Resolve the shot just proposed at (x, y) on behalf of its target.

        Subscribed to ``ShotProposed`` when automatic acknowledgement is enabled.
        The acting player is the pending shot's target, not the bound caller.
        """
        return self._acknowledge("acknowledge_shot_handler", match_id, expected=(x, y))

    def _acknowledge(
        self,
        operation: str,
        match_id: str,
        *,
        expected: tuple[int, int] | None = None,
    ) -> str:
        with _rejections_logged(operation, match_id), self._registry.lock(match_id):
            match = self._registry.get(match_id)
            if match.is_finished():
                raise FinishedError()
            if expected is None:
                caller = self._identity.current_player()
            else:
                live = match.pending
                if live is None or (live.x, live.y) != expected:
                    raise InvalidError("no pending shot")
                caller = live.target
            pending = match.acknowledge_shot(caller)

            # The caller is the target, so their own namespace holds the target board.
            namespace = self._store.namespace_for(caller)
            target_board = namespace.get(match_id)
            if target_board is None:
                raise InvalidError("target board unavailable")

            outcome = resolve_shot(match, target_board)
            namespace.insert(match_id, target_board)
            self._registry.commit(match)

        logger.info(
            "shot_fired match_id=%s x=%d y=%d result=%s",
            match_id,
            pending.x,
            pending.y,
            outcome.value,
            extra={"match_id": match_id, "x": pending.x, "y": pending.y, "result": outcome.value},
        )
        if match.winner is not None:
            logger.info(
                "match_won match_id=%s winner=%s",
                match_id,
                match.winner,
                extra={"match_id": match_id, "winner": str(match.winner)},
            )
            self._events.publish(Winner(match_id=match_id))
            self._events.publish(MatchEnded(match_id=match_id))
        self._events.publish(
            ShotFired(match_id=match_id, x=pending.x, y=pending.y, result=outcome.value)
        )
        return outcome.value

    def get_own_board(self, match_id: str) -> BoardView:
        """Return the caller's own board for the match."""
        with _rejections_logged("get_own_board", match_id):
            match = self._registry.get(match_id)
            caller = self._identity.current_player()
            player_board = self._store.namespace_for(caller).get(match_id)
            if player_board is None:
                raise NotFoundError(match_id)
            return own_board_view(match, player_board, caller)

    def get_shots(self, match_id: str) -> BoardView:
        """Return the caller's shot-history board for the match."""
        with _rejections_logged("get_shots", match_id):
            match = self._registry.get(match_id)
            caller = self._identity.current_player()
            if not match.is_player(caller):
                raise ForbiddenError("not a player")
            return shots_view(match, caller)

    def get_matches(self) -> list[str]:
        """Return ids of matches the caller holds a private board for."""
        caller = self._identity.current_player()
        return self._store.namespace_for(caller).keys()

    def get_active_match_id(self) -> str | None:
        latest = self._registry.latest()
        return latest.id if latest is not None else None

    def get_current_turn(self) -> str | None:
        latest = self._registry.latest()
        return latest.turn.to_base58() if latest is not None else None

    def get_current_user(self) -> str:
        return self._identity.current_player().to_base58()


def create_service(
    settings: GameSettings | None = None,
    *,
    identity: IdentityProvider | None = None,
    events: EventBus | None = None,
    clock_ms: Callable[[], int] | None = None,
) -> BattleshipService:
    """Wire a service with fresh in-memory registry and private store.

    With ``auto_acknowledge_shots`` set, every proposed shot is resolved for its
    target as soon as ``ShotProposed`` is published.
    """
    resolved = settings or GameSettings.from_env()
    bus = events or EventBus()
    service = BattleshipService(
        registry=MatchRegistry(max_active_matches=resolved.max_active_matches),
        store=PrivateBoardStore(),
        identity=identity or ContextIdentityProvider(),
        events=bus,
        settings=resolved,
        ids=MatchIdGenerator(clock_ms),
    )
    if resolved.auto_acknowledge_shots:
        bus.subscribe(
            ShotProposed,
            lambda event: service.acknowledge_shot_handler(event.match_id, event.x, event.y),
        )
    return service
