"""Shot outcome evaluation against the target's private board."""

from __future__ import annotations

import logging

from battleship.game.core.errors import InvalidError
from battleship.game.core.match import Match
from battleship.game.core.models import Cell, ShotOutcome
from battleship.game.core.players import PlayerBoard

logger = logging.getLogger(__name__)


def resolve_shot(match: Match, target_board: PlayerBoard) -> ShotOutcome:
    """Resolve the match's pending shot using the target's own board.

    The pending shot is checked before anything is mutated, so either both the
    board and the match are updated or neither is.
    """
    pending = match.pending
    if pending is None:
        raise InvalidError("no pending shot")

    is_hit = target_board.board.get(pending.x, pending.y) is Cell.SHIP
    if is_hit:
        target_board.board.set(pending.x, pending.y, Cell.HIT)
        target_board.decrement_ships()
        if target_board.ship_count == 0:
            match.set_winner(pending.shooter)

    outcome = match.resolve_shot(is_hit)
    logger.debug(
        "shot_resolved match_id=%s x=%d y=%d outcome=%s remaining=%d",
        match.id,
        pending.x,
        pending.y,
        outcome.value,
        target_board.ship_count,
    )
    return outcome
