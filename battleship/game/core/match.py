"""Match state machine: placement, two-phase shots, turns and winner.

Phases are derived from fields rather than stored as a tag:

* setup: at least one player has not placed ships
* active: both placed, no pending shot, no winner
* shot pending: ``pending`` is set
* finished: ``winner`` is set; terminal
"""

from __future__ import annotations

from dataclasses import dataclass, field

from battleship.game.core.board import Board
from battleship.game.core.errors import FinishedError, ForbiddenError, InvalidError
from battleship.game.core.keys import PlayerKey
from battleship.game.core.models import BOARD_SIZE, Cell, ShotOutcome
from battleship.game.core.validation import validate_coordinates


@dataclass(frozen=True, slots=True)
class PendingShot:
    """Proposed shot awaiting resolution by its target."""

    x: int
    y: int
    shooter: PlayerKey
    target: PlayerKey


@dataclass(slots=True)
class Match:
    """Shared, non-secret state of one game between two players."""

    id: str
    player1: PlayerKey
    player2: PlayerKey
    turn: PlayerKey
    winner: PlayerKey | None = None
    placed_p1: bool = False
    placed_p2: bool = False
    pending: PendingShot | None = None
    shots_p1: Board = field(default_factory=Board.empty)
    shots_p2: Board = field(default_factory=Board.empty)
    allow_repeat_shots: bool = False

    @classmethod
    def create(
        cls,
        match_id: str,
        player1: PlayerKey,
        player2: PlayerKey,
        *,
        allow_repeat_shots: bool = False,
    ) -> Match:
        """Create a match where player1 moves first."""
        if player1 == player2:
            raise InvalidError("players must differ")
        return cls(
            id=match_id,
            player1=player1,
            player2=player2,
            turn=player1,
            allow_repeat_shots=allow_repeat_shots,
        )

    def is_player(self, player: PlayerKey) -> bool:
        return player in (self.player1, self.player2)

    def opponent_of(self, player: PlayerKey) -> PlayerKey:
        return self.player2 if player == self.player1 else self.player1

    def is_turn(self, player: PlayerKey) -> bool:
        return self.turn == player

    def switch_turn(self) -> None:
        self.turn = self.opponent_of(self.turn)

    def is_finished(self) -> bool:
        return self.winner is not None

    def both_players_placed(self) -> bool:
        return self.placed_p1 and self.placed_p2

    def has_pending_shot(self) -> bool:
        return self.pending is not None

    def has_placed(self, player: PlayerKey) -> bool:
        return self.placed_p1 if player == self.player1 else self.placed_p2

    def mark_placed(self, player: PlayerKey) -> None:
        """Record that a player completed ship placement."""
        if not self.is_player(player):
            raise ForbiddenError("not a player")
        if player == self.player1:
            self.placed_p1 = True
        else:
            self.placed_p2 = True

    def shots_for(self, player: PlayerKey) -> Board:
        """Return the shot-history board owned by the player."""
        return self.shots_p1 if player == self.player1 else self.shots_p2

    def propose_shot(self, shooter: PlayerKey, x: int, y: int) -> None:
        """Record a shot from the turn holder and mark it pending on their shot history."""
        if self.is_finished():
            raise FinishedError()
        if not self.both_players_placed():
            raise InvalidError("both players must place ships first")
        validate_coordinates(x, y, BOARD_SIZE)
        if self.has_pending_shot():
            raise InvalidError("shot already pending")
        if not self.is_player(shooter):
            raise ForbiddenError("not a player")
        if not self.is_turn(shooter):
            raise ForbiddenError("not your turn")

        shots = self.shots_for(shooter)
        if not self.allow_repeat_shots and shots.get(x, y) in (Cell.HIT, Cell.MISS):
            raise InvalidError("cell already targeted")

        shots.set(x, y, Cell.PENDING)
        self.pending = PendingShot(x=x, y=y, shooter=shooter, target=self.opponent_of(shooter))

    def acknowledge_shot(self, target: PlayerKey) -> PendingShot:
        """Confirm the caller is the pending target; resolution happens separately."""
        if self.pending is None:
            raise InvalidError("no pending shot")
        if self.pending.target != target:
            raise ForbiddenError("not the target")
        return self.pending

    def resolve_shot(self, is_hit: bool) -> ShotOutcome:
        """Consume the pending shot, record its outcome and pass the turn unless won."""
        if self.pending is None:
            raise RuntimeError("resolve_shot called without a pending shot")
        pending = self.pending
        self.pending = None

        outcome = ShotOutcome.HIT if is_hit else ShotOutcome.MISS
        self.shots_for(pending.shooter).set(
            pending.x, pending.y, Cell.HIT if is_hit else Cell.MISS
        )
        if self.winner is None:
            self.switch_turn()
        return outcome

    def set_winner(self, winner: PlayerKey) -> None:
        if self.winner is not None:
            raise FinishedError()
        if not self.is_player(winner):
            raise ForbiddenError("not a player")
        self.winner = winner
