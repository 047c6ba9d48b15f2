from __future__ import annotations

from typing import Dict, List, Sequence

from .grid import EMPTY, SIZE

# Player one is drawn as a circle, player two as a cross.
SHAPES = ("O", "X")


def format_clock(seconds: int) -> str:
    """Formats remaining seconds as zero-padded MM:SS."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def pretty(columns: Sequence[Sequence[int]], player_ids: Sequence[int] = (1, 2)) -> str:
    """Generates a human-readable picture of a [column][row] grid, one text line per row."""
    symbols: Dict[int, str] = {EMPTY: "."}
    for pid, shape in zip(player_ids, SHAPES):
        symbols[pid] = shape
    lines: List[str] = []
    for row in range(SIZE):
        cells: List[str] = []
        for column in range(SIZE):
            cell = columns[column][row]
            if cell not in symbols:
                raise ValueError(f"Unknown cell id: {cell}")
            cells.append(symbols[cell])
        lines.append(" ".join(cells))
    return "\n".join(lines)


def describe_outcome(winner, reason: str, scores: Dict[int, int]) -> str:
    tally = "/".join(str(scores[pid]) for pid in sorted(scores))
    if winner is None:
        return f"No winner ({reason}) - {tally}"
    return f"Winner: Player {winner} - {tally}"
