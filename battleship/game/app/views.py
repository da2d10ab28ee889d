"""Read-only board projections handed to clients."""

from __future__ import annotations

from dataclasses import dataclass

from battleship.game.core.keys import PlayerKey
from battleship.game.core.match import Match
from battleship.game.core.models import Cell
from battleship.game.core.players import PlayerBoard
from battleship.game.infra.json_codec import dumps_text


@dataclass(frozen=True, slots=True)
class BoardView:
    """Board snapshot as wire codes (0 empty, 1 ship, 2 hit, 3 miss, 4 pending)."""

    size: int
    cells: tuple[int, ...]

    def as_dict(self) -> dict[str, object]:
        return {"size": self.size, "cells": list(self.cells)}

    def to_json(self) -> str:
        return dumps_text(self.as_dict())


def own_board_view(match: Match, player_board: PlayerBoard, caller: PlayerKey) -> BoardView:
    """Project the caller's own board, marking a live shot aimed at them as pending."""
    board = player_board.board
    cells = board.codes()
    pending = match.pending
    if pending is not None and pending.target == caller:
        cells[board.index(pending.x, pending.y)] = int(Cell.PENDING)
    return BoardView(size=board.size, cells=tuple(cells))


def shots_view(match: Match, caller: PlayerKey) -> BoardView:
    """Project the caller's shot-history board."""
    shots = match.shots_for(caller)
    return BoardView(size=shots.size, cells=tuple(shots.codes()))
