"""Domain error taxonomy surfaced to callers."""

from __future__ import annotations


class GameError(Exception):
    """Base class for caller-visible game failures."""

    kind = "GameError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, object]:
        """Return tagged result payload for this failure."""
        return {"kind": self.kind, "data": self.message}


class NotFoundError(GameError, LookupError):
    """Referenced match does not exist."""

    kind = "NotFound"

    def __init__(self, match_id: str) -> None:
        super().__init__(match_id)
        self.match_id = match_id

    def __str__(self) -> str:
        return f"not found: {self.match_id}"


class InvalidError(GameError, ValueError):
    """Malformed input, rule violation or wrong game phase."""

    kind = "Invalid"

    def __str__(self) -> str:
        return f"invalid input: {self.message}"


class ForbiddenError(GameError):
    """Caller is not allowed to perform the action."""

    kind = "Forbidden"

    def __str__(self) -> str:
        return f"forbidden: {self.message}"


class FinishedError(GameError):
    """Match already concluded."""

    kind = "Finished"

    def __init__(self, message: str = "already finished") -> None:
        super().__init__(message)

    def __str__(self) -> str:
        return "already finished"
