from __future__ import annotations

import logging
import threading
from typing import Callable, List

logger = logging.getLogger(__name__)

TickCallback = Callable[[], object]


class Countdown:
    """Handle for an armed once-per-interval ticker. Cancelling it is final."""

    def __init__(self, on_tick: TickCallback) -> None:
        self._on_tick = on_tick
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def fire(self) -> None:
        """Delivers one tick to the callback, even if the handle was cancelled since."""
        self._on_tick()


class ThreadTicker:
    """Arms countdowns driven by a daemon thread per round, ticking every `interval` seconds.

    The thread does not serialise with anything; callers that share state with
    other threads wrap `on_tick` themselves (see GameSession).
    """

    def __init__(self, interval: float = 1.0) -> None:
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval = interval

    def __call__(self, on_tick: TickCallback) -> Countdown:
        countdown = Countdown(on_tick)

        def _worker() -> None:
            # Event.wait doubles as an interruptible sleep
            while not countdown._cancelled.wait(self.interval):
                try:
                    countdown.fire()
                except Exception:
                    logger.exception("Tick callback failed; stopping countdown")
                    return

        threading.Thread(target=_worker, name="tictac-countdown", daemon=True).start()
        return countdown


class ManualTicker:
    """Arms countdowns that only advance when `tick()` is called."""

    def __init__(self) -> None:
        self.armed: List[Countdown] = []

    def __call__(self, on_tick: TickCallback) -> Countdown:
        countdown = Countdown(on_tick)
        # Drop cancelled handles so a long session does not accumulate them
        self.armed = self.live
        self.armed.append(countdown)
        return countdown

    @property
    def live(self) -> List[Countdown]:
        return [c for c in self.armed if not c.cancelled]

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            # Re-read each time: a tick may end the round and arm a new countdown
            for countdown in self.live:
                countdown.fire()
