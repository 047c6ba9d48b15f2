from __future__ import annotations

from dataclasses import dataclass

from .grid import Grid


@dataclass(frozen=True)
class RoundState:
    """Represents one round in progress: the grid, whose move is awaited and the seconds left."""
    grid: Grid
    active_player: int
    time_remaining: int

    def with_turn(self, next_player: int) -> 'RoundState':
        return RoundState(self.grid, next_player, self.time_remaining)

    def with_time(self, seconds: int) -> 'RoundState':
        return RoundState(self.grid, self.active_player, max(0, seconds))
