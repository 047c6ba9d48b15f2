from __future__ import annotations

# Facade module that re-exports the tictac core API.
# The Flask app, the root-level tests and ad-hoc scripts import from here.
# Single-responsibility modules live under tictac_core/*.

try:
    from .tictac_core.errors import (  # type: ignore
        TicTacError,
        InvalidIdError,
        MoveError,
        CellOccupiedError,
        OutOfRangeMoveError,
        RoundNotActiveError,
    )
    from .tictac_core.player import PlayerRecord  # type: ignore
    from .tictac_core.grid import Grid, Coord, EMPTY, SIZE, cell_from_point  # type: ignore
    from .tictac_core.state import RoundState  # type: ignore
    from .tictac_core.rules import WINNING_LINES, winning_line, find_winner, is_draw  # type: ignore
    from .tictac_core.clock import Countdown, ManualTicker, ThreadTicker  # type: ignore
    from .tictac_core.engine import (  # type: ignore
        RoundEngine,
        RoundSnapshot,
        RoundOutcome,
        ROUND_DURATION_SECONDS,
        WIN,
        DRAW,
        TIMEOUT,
        RESTART,
    )
    from .tictac_core.render import pretty, format_clock, describe_outcome  # type: ignore
    from .tictac_core.session import GameSession  # type: ignore
    from .tictac_core.config import Config  # type: ignore
except ImportError:
    from tictac_core.errors import (  # type: ignore
        TicTacError,
        InvalidIdError,
        MoveError,
        CellOccupiedError,
        OutOfRangeMoveError,
        RoundNotActiveError,
    )
    from tictac_core.player import PlayerRecord  # type: ignore
    from tictac_core.grid import Grid, Coord, EMPTY, SIZE, cell_from_point  # type: ignore
    from tictac_core.state import RoundState  # type: ignore
    from tictac_core.rules import WINNING_LINES, winning_line, find_winner, is_draw  # type: ignore
    from tictac_core.clock import Countdown, ManualTicker, ThreadTicker  # type: ignore
    from tictac_core.engine import (  # type: ignore
        RoundEngine,
        RoundSnapshot,
        RoundOutcome,
        ROUND_DURATION_SECONDS,
        WIN,
        DRAW,
        TIMEOUT,
        RESTART,
    )
    from tictac_core.render import pretty, format_clock, describe_outcome  # type: ignore
    from tictac_core.session import GameSession  # type: ignore
    from tictac_core.config import Config  # type: ignore


def new_engine(**kwargs) -> RoundEngine:
    """Builds an engine for players 1 and 2 and starts its first round."""
    engine = RoundEngine(**kwargs)
    engine.start_round()
    return engine


def main() -> None:
    # CLI driver delegated to tictac_core.cli
    try:
        from .tictac_core.cli import main as _main  # type: ignore
    except ImportError:
        from tictac_core.cli import main as _main  # type: ignore
    _main()


if __name__ == '__main__':
    main()
