"""Opaque fixed-length player identifiers."""

from __future__ import annotations

from dataclasses import dataclass

import base58

from battleship.game.core.errors import InvalidError

KEY_LENGTH = 32


@dataclass(frozen=True, slots=True)
class PlayerKey:
    """32-byte player identifier; equality is the only operation the rules need."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != KEY_LENGTH:
            raise InvalidError("key length")

    @classmethod
    def from_base58(cls, encoded: str) -> PlayerKey:
        try:
            decoded = base58.b58decode(encoded.strip())
        except ValueError as exc:
            raise InvalidError("bad base58 key") from exc
        return cls(decoded)

    def to_base58(self) -> str:
        return base58.b58encode(self.raw).decode("ascii")

    def __str__(self) -> str:
        return self.to_base58()
