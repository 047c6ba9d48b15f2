from __future__ import annotations


class TicTacError(Exception):
    """Base class for every error raised by the game engine."""


class InvalidIdError(TicTacError, ValueError):
    """A player id is not a strictly positive integer, or is not unique."""


class MoveError(TicTacError, ValueError):
    """A move was rejected; the round state is untouched and the same player keeps the turn."""

    def __init__(self, column, row, message: str) -> None:
        super().__init__(message)
        self.column = column
        self.row = row


class CellOccupiedError(MoveError):
    def __init__(self, column: int, row: int, owner: int) -> None:
        super().__init__(column, row, f"Cell already taken! ({column}, {row}) belongs to player {owner}")
        self.owner = owner


class OutOfRangeMoveError(MoveError):
    def __init__(self, column, row) -> None:
        super().__init__(column, row, f"Cell ({column!r}, {row!r}) is outside the 3x3 grid")


class RoundNotActiveError(TicTacError, RuntimeError):
    """A move arrived while no round is running."""
