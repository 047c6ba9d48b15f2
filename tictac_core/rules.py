from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .errors import CellOccupiedError, OutOfRangeMoveError
from .grid import EMPTY, SIZE, Coord, Grid, in_bounds
from .state import RoundState

Line = Tuple[Coord, Coord, Coord]

ROWS: Tuple[Line, ...] = tuple(((0, r), (1, r), (2, r)) for r in range(SIZE))
COLUMNS: Tuple[Line, ...] = tuple(((c, 0), (c, 1), (c, 2)) for c in range(SIZE))
# top-left -> bottom-right, then top-right -> bottom-left
DIAGONALS: Tuple[Line, ...] = (((0, 0), (1, 1), (2, 2)), ((2, 0), (1, 1), (0, 2)))

# Scan order decides which line is reported: rows, columns, diagonals.
WINNING_LINES: Tuple[Line, ...] = ROWS + COLUMNS + DIAGONALS


def winning_line(grid: Grid) -> Optional[Line]:
    """Returns the first line fully owned by one player, or None."""
    for line in WINNING_LINES:
        first = grid.at(*line[0])
        if first != EMPTY and all(grid.at(*coord) == first for coord in line[1:]):
            return line
    return None


def find_winner(grid: Grid) -> Optional[int]:
    """Returns the id of the player owning a complete line, or None if nobody does."""
    line = winning_line(grid)
    return grid.at(*line[0]) if line is not None else None


def is_draw(grid: Grid) -> bool:
    """A full grid with no complete line."""
    return grid.is_full() and winning_line(grid) is None


def check_move(state: RoundState, column: int, row: int) -> None:
    """Raises if the move cannot be played on the given state."""
    if not in_bounds(column, row):
        raise OutOfRangeMoveError(column, row)
    owner = state.grid.at(column, row)
    if owner != EMPTY:
        raise CellOccupiedError(column, row, owner)


def place(state: RoundState, column: int, row: int) -> RoundState:
    """Marks the cell for the active player and returns the new state. The turn is not changed."""
    check_move(state, column, row)
    grid = state.grid.with_cell(column, row, state.active_player)
    return RoundState(grid, state.active_player, state.time_remaining)


def other_player(player: int, players: Sequence[int]) -> int:
    first, second = players
    return second if player == first else first
