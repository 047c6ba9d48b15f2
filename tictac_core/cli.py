from __future__ import annotations

import argparse
import logging
from typing import Optional, Tuple

from .clock import ManualTicker, ThreadTicker
from .config import Config
from .engine import RoundOutcome
from .errors import MoveError
from .render import describe_outcome, format_clock, pretty
from .session import GameSession


def parse_move(text: str) -> Optional[Tuple[int, int]]:
    """Parses 'c,r' or 'c r' into (column, row); None when the text is not two integers."""
    sep = ',' if ',' in text else ' '
    parts = [t for t in text.split(sep) if t.strip() != '']
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description='Two-player timed tic-tac-toe in the terminal')
    parser.add_argument('--seconds', type=int, default=Config.ROUND_DURATION_SEC, help='Round duration in seconds')
    parser.add_argument('--tick', type=float, default=Config.TICK_INTERVAL_SEC, help='Wall-clock seconds per countdown tick')
    parser.add_argument('--manual-clock', action='store_true', help='Do not run the countdown in the background')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL, help='Logging level (DEBUG, INFO, ...)')
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format=Config.LOG_FORMAT, datefmt=Config.LOG_DATEFMT)

    class _CliConfig(Config):
        ROUND_DURATION_SEC = args.seconds
        TICK_INTERVAL_SEC = args.tick

    ticker = ManualTicker() if args.manual_clock else ThreadTicker(args.tick)

    def show_outcome(outcome: RoundOutcome) -> None:
        print()
        print(describe_outcome(outcome.winner, outcome.reason, outcome.scores))
        print('New round!')

    session = GameSession(config=_CliConfig, ticker=ticker)
    session.add_listener(on_round_end=show_outcome)
    ids = session.engine.player_ids
    print(f"Player {ids[0]} plays O, player {ids[1]} plays X. Enter moves as column,row (0-2). 'n' restarts, 'q' quits.")

    try:
        while True:
            view = session.view()
            print()
            print(pretty(view.grid, ids))
            print(f"[{format_clock(view.time_remaining)}] round {view.round_number}  score {view.scores[ids[0]]}/{view.scores[ids[1]]}")
            try:
                text = input(f"Player {view.active_player}, your move: ").strip().lower()
            except EOFError:
                break
            if text in ('q', 'quit', 'exit'):
                break
            if text in ('n', 'new'):
                session.restart()
                continue
            move = parse_move(text)
            if move is None:
                print('Could not parse. Try again.')
                continue
            try:
                session.move(*move)
            except MoveError as exc:
                print(f"error: {exc}")
    finally:
        session.close()
        scores = session.engine.scores()
        print("Final score: " + "/".join(str(scores[pid]) for pid in ids))


if __name__ == '__main__':
    main()
