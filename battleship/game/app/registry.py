"""Match registry, active-match policy and match id generation."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from copy import deepcopy

from battleship.game.core.errors import InvalidError, NotFoundError
from battleship.game.core.match import Match


class MatchIdGenerator:
    """Produces opaque ``match-<millis>-<nonce>`` identifiers."""

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._nonce = 0
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            self._nonce += 1
            nonce = self._nonce
        return f"match-{self._clock_ms()}-{nonce}"


class MatchRegistry:
    """Match id -> match state, with a cap on concurrently unfinished matches.

    ``get`` hands out working copies; changes become visible only through ``commit``.
    """

    def __init__(self, max_active_matches: int = 1) -> None:
        self._max_active = max_active_matches
        self._matches: dict[str, Match] = {}
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()
        self._latest_id: str | None = None

    @property
    def max_active_matches(self) -> int:
        return self._max_active

    def active_count(self) -> int:
        """Return number of matches without a winner."""
        return sum(1 for match in self._matches.values() if not match.is_finished())

    def add(self, match: Match) -> None:
        with self._guard:
            if match.id in self._matches:
                raise InvalidError("match id already exists")
            if self.active_count() >= self._max_active:
                raise InvalidError("another match is active")
            self._matches[match.id] = deepcopy(match)
            self._locks[match.id] = threading.RLock()
            self._latest_id = match.id

    def get(self, match_id: str) -> Match:
        match = self._matches.get(match_id)
        if match is None:
            raise NotFoundError(match_id)
        return deepcopy(match)

    def commit(self, match: Match) -> None:
        """Persist a working copy previously obtained from ``get``."""
        if match.id not in self._matches:
            raise NotFoundError(match.id)
        self._matches[match.id] = deepcopy(match)

    def lock(self, match_id: str) -> threading.RLock:
        """Return the mutual-exclusion lock scoped to one match."""
        lock = self._locks.get(match_id)
        if lock is None:
            raise NotFoundError(match_id)
        return lock

    def latest(self) -> Match | None:
        """Return a copy of the most recently created match, finished or not."""
        if self._latest_id is None:
            return None
        return self.get(self._latest_id)

    def ids(self) -> list[str]:
        return list(self._matches)
