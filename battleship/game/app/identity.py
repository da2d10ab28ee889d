"""Caller identity providers."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Protocol

from battleship.game.core.errors import ForbiddenError
from battleship.game.core.keys import PlayerKey


class IdentityProvider(Protocol):
    """Supplies the identity of the player issuing the current call."""

    def current_player(self) -> PlayerKey:
        """Return current caller identity."""


class ContextIdentityProvider:
    """Identity provider backed by a context variable.

    Hosts bind the authenticated caller around each request with ``acting_as``.
    """

    def __init__(self) -> None:
        self._current: ContextVar[PlayerKey | None] = ContextVar("battleship_caller", default=None)

    def current_player(self) -> PlayerKey:
        player = self._current.get()
        if player is None:
            raise ForbiddenError("no caller identity")
        return player

    @contextmanager
    def acting_as(self, player: PlayerKey) -> Iterator[PlayerKey]:
        token = self._current.set(player)
        try:
            yield player
        finally:
            self._current.reset(token)
