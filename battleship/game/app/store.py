"""Player-partitioned private storage for own boards.

The store is never read as a whole. Callers obtain a ``PlayerNamespace`` for one
player and every read or write goes through it, so code holding a namespace for
one player has no path to the other player's boards.
"""

from __future__ import annotations

from copy import deepcopy

from battleship.game.core.keys import PlayerKey
from battleship.game.core.players import PlayerBoard


class PlayerNamespace:
    """Capability over one player's private boards, keyed by match id."""

    def __init__(self, owner: PlayerKey, boards: dict[str, PlayerBoard]) -> None:
        self._owner = owner
        self._boards = boards

    @property
    def owner(self) -> PlayerKey:
        return self._owner

    def get(self, match_id: str) -> PlayerBoard | None:
        """Return a working copy of the stored board, if any."""
        board = self._boards.get(match_id)
        return deepcopy(board) if board is not None else None

    def get_or_default(self, match_id: str) -> PlayerBoard:
        board = self.get(match_id)
        return board if board is not None else PlayerBoard()

    def insert(self, match_id: str, board: PlayerBoard) -> None:
        """Commit a board for the match, replacing any previous one."""
        self._boards[match_id] = deepcopy(board)

    def keys(self) -> list[str]:
        return list(self._boards)

    def __contains__(self, match_id: object) -> bool:
        return match_id in self._boards


class PrivateBoardStore:
    """Holds every player's private boards, partitioned by player."""

    def __init__(self) -> None:
        self._partitions: dict[PlayerKey, dict[str, PlayerBoard]] = {}

    def namespace_for(self, player: PlayerKey) -> PlayerNamespace:
        return PlayerNamespace(player, self._partitions.setdefault(player, {}))
