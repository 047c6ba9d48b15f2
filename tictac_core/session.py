from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Deque, List, Optional, Union

from .clock import Countdown, ManualTicker, ThreadTicker, TickCallback
from .config import Config
from .engine import RoundEngine, RoundOutcome, RoundSnapshot

logger = logging.getLogger(__name__)

Ticker = Union[ThreadTicker, ManualTicker]

# Finished rounds kept for display; older ones are dropped
OUTCOME_HISTORY = 50


def make_ticker(config=Config) -> Ticker:
    mode = str(config.CLOCK_MODE)
    if mode == 'client':
        return ManualTicker()
    if mode == 'server':
        return ThreadTicker(float(config.TICK_INTERVAL_SEC))
    raise ValueError(f"Unknown clock mode {mode!r}; expected 'server' or 'client'")


class GameSession:
    """One session of back-to-back rounds shared between threads.

    The engine itself is single-threaded; every call into it, including ticks
    coming from a ticker thread, goes through one re-entrant lock so events are
    applied one at a time in arrival order.
    """

    def __init__(self, config=Config, ticker: Optional[Ticker] = None) -> None:
        self._lock = threading.RLock()
        self.ticker = ticker if ticker is not None else make_ticker(config)
        self.outcomes: Deque[RoundOutcome] = deque(maxlen=OUTCOME_HISTORY)
        self.rounds_finished = 0
        self._change_listeners: List[Callable[[RoundSnapshot], None]] = []
        self._end_listeners: List[Callable[[RoundOutcome], None]] = []
        self.engine = RoundEngine(
            round_seconds=int(config.ROUND_DURATION_SEC),
            countdown=self._arm,
            on_change=self._changed,
            on_round_end=self._round_ended,
        )
        with self._lock:
            self.engine.start_round()

    @property
    def client_clock(self) -> bool:
        return isinstance(self.ticker, ManualTicker)

    @property
    def last_outcome(self) -> Optional[RoundOutcome]:
        return self.outcomes[-1] if self.outcomes else None

    def add_listener(
        self,
        on_change: Optional[Callable[[RoundSnapshot], None]] = None,
        on_round_end: Optional[Callable[[RoundOutcome], None]] = None,
    ) -> None:
        if on_change is not None:
            self._change_listeners.append(on_change)
        if on_round_end is not None:
            self._end_listeners.append(on_round_end)

    def view(self) -> RoundSnapshot:
        with self._lock:
            return self.engine.snapshot()

    def move(self, column: int, row: int) -> Optional[RoundOutcome]:
        with self._lock:
            return self.engine.apply_move(column, row)

    def tick(self, times: int = 1) -> Optional[RoundOutcome]:
        """Advances the clock by hand. Only valid with a manual (client-driven) clock.

        At most one round length can be ticked per call. Returns the last outcome
        produced by these ticks, or None if no round ended.
        """
        if not isinstance(self.ticker, ManualTicker):
            raise RuntimeError("Clock is driven by the server; manual ticks are disabled")
        limit = self.engine.round_seconds
        if not isinstance(times, int) or isinstance(times, bool) or not 1 <= times <= limit:
            raise ValueError(f"times must be an integer between 1 and {limit}")
        with self._lock:
            before = self.rounds_finished
            self.ticker.tick(times)
            return self.last_outcome if self.rounds_finished != before else None

    def restart(self) -> RoundOutcome:
        with self._lock:
            return self.engine.restart()

    def close(self) -> None:
        with self._lock:
            self.engine.shutdown()
        logger.info("Session closed after %d finished rounds", self.rounds_finished)

    def _arm(self, on_tick: TickCallback) -> Countdown:
        def _locked_tick() -> None:
            with self._lock:
                on_tick()

        return self.ticker(_locked_tick)

    def _changed(self, snapshot: RoundSnapshot) -> None:
        for listener in self._change_listeners:
            listener(snapshot)

    def _round_ended(self, outcome: RoundOutcome) -> None:
        self.outcomes.append(outcome)
        self.rounds_finished += 1
        for listener in self._end_listeners:
            listener(outcome)
