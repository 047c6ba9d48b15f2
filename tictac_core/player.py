from __future__ import annotations

from .errors import InvalidIdError

PlayerId = int


class PlayerRecord:
    """Holds a player's identity and the number of rounds they won this session."""

    def __init__(self, player_id: PlayerId) -> None:
        # bool is an int subclass but never a valid id
        if not isinstance(player_id, int) or isinstance(player_id, bool):
            raise InvalidIdError(f"Expected integer player id, got {player_id!r}")
        if player_id <= 0:
            raise InvalidIdError(f"Player id must be strictly positive, got {player_id}")
        self._id = player_id
        self._score = 0

    @property
    def id(self) -> PlayerId:
        return self._id

    @property
    def score(self) -> int:
        return self._score

    def record_win(self) -> None:
        self._score += 1

    def reset_for_new_session(self) -> None:
        """Scores live for the whole session, so there is nothing to clear between rounds."""

    def __repr__(self) -> str:
        return f"PlayerRecord(id={self._id}, score={self._score})"
