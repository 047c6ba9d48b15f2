from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from .clock import Countdown, TickCallback
from .errors import InvalidIdError, MoveError, RoundNotActiveError
from .grid import Grid
from .player import PlayerId, PlayerRecord
from . import rules
from .state import RoundState

logger = logging.getLogger(__name__)

ROUND_DURATION_SECONDS = 180

Arm = Callable[[TickCallback], Countdown]

WIN = "win"
DRAW = "draw"
TIMEOUT = "timeout"
RESTART = "restart"


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view handed to the display collaborator after every mutation."""
    grid: Tuple[Tuple[int, ...], ...]  # [column][row]
    active_player: PlayerId
    time_remaining: int
    round_number: int
    scores: Dict[PlayerId, int]


@dataclass(frozen=True)
class RoundOutcome:
    """How a round ended. `winner` is None for draws, timeouts and restarts."""
    winner: Optional[PlayerId]
    reason: str
    scores: Dict[PlayerId, int]
    round_number: int


class RoundEngine:
    """Runs tic-tac-toe rounds back to back for two local players.

    The engine never sleeps or spawns anything itself: moves arrive through
    `apply_move`, seconds through `on_timer_tick`. When `countdown` is given it
    is called at every round start with a callback to tick once per second and
    must return a handle with `cancel()`; the engine cancels it when the round
    ends. Without it the caller drives `on_timer_tick` directly.

    `on_change` receives a RoundSnapshot after every mutation, `on_round_end`
    a RoundOutcome before the next round is started.
    """

    def __init__(
        self,
        player_ids: Tuple[PlayerId, PlayerId] = (1, 2),
        round_seconds: int = ROUND_DURATION_SECONDS,
        countdown: Optional[Arm] = None,
        on_change: Optional[Callable[[RoundSnapshot], None]] = None,
        on_round_end: Optional[Callable[[RoundOutcome], None]] = None,
    ) -> None:
        first, second = (PlayerRecord(pid) for pid in player_ids)
        if first.id == second.id:
            raise InvalidIdError(f"Player ids must be unique, got {first.id} twice")
        if not isinstance(round_seconds, int) or isinstance(round_seconds, bool) or round_seconds <= 0:
            raise ValueError(f"Round duration must be a positive whole number of seconds, got {round_seconds!r}")
        self._players: Tuple[PlayerRecord, PlayerRecord] = (first, second)
        self._round_seconds = round_seconds
        self._arm = countdown
        self._on_change = on_change
        self._on_round_end = on_round_end
        self._state: Optional[RoundState] = None
        self._countdown: Optional[Countdown] = None
        self._countdown_id = 0
        self._round_number = 0

    # ---------- read access ----------

    @property
    def players(self) -> Tuple[PlayerRecord, PlayerRecord]:
        return self._players

    @property
    def player_ids(self) -> Tuple[PlayerId, PlayerId]:
        return self._players[0].id, self._players[1].id

    @property
    def is_active(self) -> bool:
        return self._state is not None

    @property
    def state(self) -> RoundState:
        if self._state is None:
            raise RoundNotActiveError("No round is running; call start_round() first")
        return self._state

    @property
    def grid(self) -> Grid:
        return self.state.grid

    @property
    def active_player(self) -> PlayerId:
        return self.state.active_player

    @property
    def time_remaining(self) -> int:
        return self.state.time_remaining

    @property
    def round_seconds(self) -> int:
        return self._round_seconds

    @property
    def round_number(self) -> int:
        return self._round_number

    @property
    def countdown_id(self) -> int:
        return self._countdown_id

    def scores(self) -> Dict[PlayerId, int]:
        return {p.id: p.score for p in self._players}

    def score_of(self, player_id: PlayerId) -> int:
        return self._record(player_id).score

    def snapshot(self) -> RoundSnapshot:
        state = self.state
        return RoundSnapshot(
            grid=state.grid.columns(),
            active_player=state.active_player,
            time_remaining=state.time_remaining,
            round_number=self._round_number,
            scores=self.scores(),
        )

    # ---------- round lifecycle ----------

    def start_round(self) -> None:
        """Clears the grid, resets the clock and hands the first move to player one. Scores are kept."""
        self._cancel_countdown()
        for player in self._players:
            player.reset_for_new_session()
        self._round_number += 1
        self._state = RoundState(
            grid=Grid.empty(),
            active_player=self._players[0].id,
            time_remaining=self._round_seconds,
        )
        if self._arm is not None:
            self._countdown = self._arm(functools.partial(self.on_timer_tick, self._countdown_id))
        logger.info("Round %d started (%ds, player %d first)", self._round_number, self._round_seconds, self._players[0].id)
        self._notify_change()

    def apply_move(self, column: int, row: int) -> Optional[RoundOutcome]:
        """Plays the active player's mark at [column][row].

        Returns the outcome when the move ended the round (a fresh round is then
        already running), None otherwise. Raises CellOccupiedError or
        OutOfRangeMoveError without touching the state.
        """
        state = self.state
        logger.debug("Player %d selected cell %s %s", state.active_player, column, row)
        try:
            state = rules.place(state, column, row)
        except MoveError as exc:
            logger.info("Rejected move by player %d: %s", state.active_player, exc)
            raise
        winner = rules.find_winner(state.grid)
        if winner is None and not state.grid.is_full():
            state = state.with_turn(rules.other_player(state.active_player, self.player_ids))
        self._state = state
        self._notify_change()

        if winner is not None:
            return self.end_round(winner, WIN)
        if state.grid.is_full():
            return self.end_round(None, DRAW)
        return None

    def on_timer_tick(self, countdown_id: Optional[int] = None) -> Optional[RoundOutcome]:
        """Takes one second off the clock; at zero the round ends with no winner.

        Ticks carrying the id of an already cancelled countdown are ignored, as
        are ticks while no round is running.
        """
        if self._state is None:
            return None
        if countdown_id is not None and countdown_id != self._countdown_id:
            logger.debug("Ignoring stale tick from countdown %d (current %d)", countdown_id, self._countdown_id)
            return None
        self._state = self._state.with_time(self._state.time_remaining - 1)
        if self._state.time_remaining == 0:
            return self.end_round(None, TIMEOUT)
        self._notify_change()
        return None

    def end_round(self, winner_id: Optional[PlayerId] = None, reason: Optional[str] = None) -> RoundOutcome:
        """Stops the clock, credits the winner if any, reports the outcome and starts the next round."""
        if self._state is None:
            raise RoundNotActiveError("No round is running")
        winner = self._record(winner_id) if winner_id is not None else None
        self._cancel_countdown()
        if winner is not None:
            winner.record_win()
        outcome = RoundOutcome(
            winner=winner_id,
            reason=reason or (WIN if winner_id is not None else TIMEOUT),
            scores=self.scores(),
            round_number=self._round_number,
        )
        logger.info("Round %d ended: %s (winner=%s, scores=%s)", outcome.round_number, outcome.reason, winner_id, outcome.scores)
        if self._on_round_end is not None:
            self._on_round_end(outcome)
        self.start_round()
        return outcome

    def restart(self) -> RoundOutcome:
        """Abandons the running round without crediting anyone."""
        return self.end_round(None, RESTART)

    def shutdown(self) -> None:
        """Cancels the countdown and returns to idle. Used when the hosting process exits."""
        self._cancel_countdown()
        self._state = None

    # ---------- internals ----------

    def _record(self, player_id: PlayerId) -> PlayerRecord:
        for player in self._players:
            if player.id == player_id:
                return player
        raise InvalidIdError(f"Unknown player id {player_id!r}")

    def _cancel_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None
        # Bump even without a handle so ticks bound to the old round go stale
        self._countdown_id += 1

    def _notify_change(self) -> None:
        if self._on_change is not None and self._state is not None:
            self._on_change(self.snapshot())
