from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Tuple

Coord = Tuple[int, int]  # (column, row)

SIZE = 3
EMPTY = 0


def in_bounds(column: object, row: object) -> bool:
    """True when both coordinates are plain ints inside [0, SIZE)."""
    for v in (column, row):
        if not isinstance(v, int) or isinstance(v, bool):
            return False
        if not 0 <= v < SIZE:
            return False
    return True


def cell_from_point(x: float, y: float, width: float, height: float) -> Coord:
    """Maps a pointer position on a drawing surface to the (column, row) under it.

    Positions on the far edge are clamped into the last cell.
    """
    if not all(math.isfinite(v) for v in (x, y, width, height)):
        raise ValueError("Pointer position and surface size must be finite numbers")
    if width <= 0 or height <= 0:
        raise ValueError("Drawing surface must have a positive size")
    # x / width can overflow to inf, so clamp before floor()
    column = math.floor(min(SIZE - 1, max(0.0, x / width * SIZE)))
    row = math.floor(min(SIZE - 1, max(0.0, y / height * SIZE)))
    return column, row


@dataclass(frozen=True)
class Grid:
    """The 3x3 playing grid. Cells are stored column-major and hold EMPTY or a player id."""
    cells: Tuple[int, ...] = (EMPTY,) * (SIZE * SIZE)

    def __post_init__(self) -> None:
        if len(self.cells) != SIZE * SIZE:
            raise ValueError(f"Grid needs exactly {SIZE * SIZE} cells, got {len(self.cells)}")

    @classmethod
    def empty(cls) -> 'Grid':
        return cls()

    @staticmethod
    def index(column: int, row: int) -> int:
        """Calculates the flat index of a [column][row] cell."""
        return column * SIZE + row

    def at(self, column: int, row: int) -> int:
        return self.cells[self.index(column, row)]

    def with_cell(self, column: int, row: int, value: int) -> 'Grid':
        cells = list(self.cells)
        cells[self.index(column, row)] = value
        return Grid(tuple(cells))

    def coords(self) -> Iterable[Coord]:
        """Iterates over all (column, row) pairs, column by column."""
        for column in range(SIZE):
            for row in range(SIZE):
                yield (column, row)

    def columns(self) -> Tuple[Tuple[int, ...], ...]:
        """Nested [column][row] view for renderers."""
        return tuple(self.cells[c * SIZE:(c + 1) * SIZE] for c in range(SIZE))

    def is_full(self) -> bool:
        return EMPTY not in self.cells
