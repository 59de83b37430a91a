"""Signal-light state machine for SpeechTimer.

States
------
START    Configured, not yet started (or reset).
BLANK    Running, below the green threshold.
GREEN    Minimum time reached.
ORANGE   Approaching the maximum.
RED      Maximum time reached.
FINISH   Finish threshold reached.  Ticking stops; only reset() leaves.

Transitions
-----------
START → BLANK                         (start)
BLANK → GREEN → ORANGE → RED          (tick, elapsed >= threshold)
{running} → FINISH                    (tick, elapsed >= finish_time)
{running} ⇄ paused                    (pause / start)
Any → START                           (reset, set_config)

Thresholds are inclusive lower bounds: exactly ``orange_time`` seconds in
reads ORANGE.  Each state's timestamp is written the first time it is
entered during a run and never overwritten.  A tick that jumps past
several thresholds at once only stamps the state it lands on.

Elapsed time survives pauses: resuming shifts the start reference forward
by the time spent paused.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import InvalidOperation, ValidationError
from .config import PresetType, ThresholdConfig, create_preset
from .scheduling import DEFAULT_TICK_INTERVAL_MS, QtTickScheduler, TickScheduler

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class SignalState(Enum):
    START = "start"
    BLANK = "blank"
    GREEN = "green"
    ORANGE = "orange"
    RED = "red"
    FINISH = "finish"

    @property
    def severity(self) -> int | None:
        """Rank in START < BLANK < GREEN < ORANGE < RED; None for FINISH."""
        return _SEVERITY.get(self)


_SEVERITY: dict[SignalState, int] = {
    SignalState.START: 0,
    SignalState.BLANK: 1,
    SignalState.GREEN: 2,
    SignalState.ORANGE: 3,
    SignalState.RED: 4,
}


# ── session ───────────────────────────────────────────────────────────────


class TimerSession(QObject):
    """Elapsed-time tracker that derives a signal state from thresholds.

    Signals
    -------
    state_changed(new_state: SignalState)
        Emitted once per committed state change.
    running_changed(is_running: bool)
        Emitted when the session starts, pauses, finishes or resets.
    config_changed(config: ThresholdConfig)
        Emitted after a successful ``set_config``.
    changed(name: str)
        Generic change stream: ``"state"``, ``"is_running"``, ``"config"``
        or ``"elapsed"``.
    tick(elapsed_seconds: int)
        Emitted on every tick while running, for clock repaints.
    """

    state_changed = pyqtSignal(object)
    running_changed = pyqtSignal(bool)
    config_changed = pyqtSignal(object)
    changed = pyqtSignal(str)
    tick = pyqtSignal(int)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
        scheduler: TickScheduler | None = None,
        tick_interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)

        self._clock: Callable[[], datetime] = clock or datetime.now

        # ── configuration ─────────────────────────────────────────────
        self._config: ThresholdConfig = create_preset(PresetType.CUSTOM)

        # ── run state ─────────────────────────────────────────────────
        self._state: SignalState = SignalState.START
        self._running: bool = False
        self._start_ref: datetime = self._clock()
        self._paused_at: datetime | None = None
        self._elapsed_when_paused: timedelta = timedelta(0)
        self._timestamps: dict[SignalState, datetime | None] = {
            s: None for s in SignalState
        }

        # ── ticking ───────────────────────────────────────────────────
        self._scheduler = scheduler or QtTickScheduler(tick_interval_ms, parent=self)
        self._scheduler.bind(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> ThresholdConfig:
        return self._config

    @property
    def state(self) -> SignalState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_paused(self) -> bool:
        return not self._running and self._paused_at is not None

    @property
    def elapsed_formatted(self) -> str:
        """Elapsed time as ``mm:ss``."""
        minutes, seconds = divmod(self.elapsed_seconds(), 60)
        return f"{minutes:02d}:{seconds:02d}"

    def elapsed_time(self) -> timedelta:
        if self._running:
            return self._clock() - self._start_ref
        if self._paused_at is not None:
            return self._elapsed_when_paused
        return timedelta(0)

    def elapsed_seconds(self) -> int:
        """Whole seconds elapsed; the only input to state derivation."""
        return int(self.elapsed_time().total_seconds())

    def state_timestamp(self, state: SignalState) -> datetime | None:
        """When *state* was first reached during this run, if it was."""
        return self._timestamps[state]

    def state_timestamps(self) -> dict[SignalState, datetime]:
        """Reached states only, in enum order."""
        return {s: t for s, t in self._timestamps.items() if t is not None}

    def duration_between(
        self, start_state: SignalState, end_state: SignalState
    ) -> timedelta | None:
        """``timestamp(end_state) - timestamp(start_state)``, or None.

        No ordering is enforced; a reversed pair gives a negative delta.
        """
        start = self._timestamps[start_state]
        end = self._timestamps[end_state]
        if start is None or end is None:
            return None
        return end - start

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def set_config(self, config: ThresholdConfig) -> None:
        """Swap thresholds.  Only allowed while not running."""
        if self._running:
            raise InvalidOperation(
                "Cannot change configuration while timer is running."
            )
        errors = config.validate()
        if errors:
            raise ValidationError(errors)

        config.last_used_at = self._clock()
        self._config = config
        self.config_changed.emit(config)
        self.changed.emit("config")
        self._set_state(SignalState.START)
        logger.info("Timer configured with %r", config.name)

    def start(self) -> None:
        """Fresh start, or resume when paused.  No-op while running."""
        if self._running:
            return
        if self._state == SignalState.FINISH:
            raise InvalidOperation("Timer has finished; reset it before starting again.")

        now = self._clock()
        if self._paused_at is not None:
            self._start_ref += now - self._paused_at
            self._paused_at = None
            logger.debug("Resumed at %ss", self._elapsed_seconds_at(now))
        else:
            self._start_ref = now
            self._elapsed_when_paused = timedelta(0)
            self._clear_timestamps()
            self._timestamps[SignalState.START] = now
            self._set_state(SignalState.BLANK, now)
            logger.debug("Started fresh run")

        self._scheduler.start()
        self._set_running(True)

    def pause(self) -> None:
        """Freeze elapsed time.  State and timestamps are kept."""
        if not self._running:
            return
        self._scheduler.stop()
        now = self._clock()
        self._paused_at = now
        self._elapsed_when_paused = now - self._start_ref
        self._set_running(False)
        logger.debug("Paused at %ss", self.elapsed_seconds())

    def reset(self) -> None:
        """Stop, forget the run's history and return to START."""
        self._scheduler.stop()
        self._start_ref = self._clock()
        self._paused_at = None
        self._elapsed_when_paused = timedelta(0)
        self._clear_timestamps()
        self._set_running(False)
        self._set_state(SignalState.START)
        self.changed.emit("elapsed")

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — state derivation
    # ══════════════════════════════════════════════════════════════════

    def _elapsed_seconds_at(self, now: datetime) -> int:
        """Whole seconds of running time as of *now* (running sessions)."""
        return int((now - self._start_ref).total_seconds())

    def _on_tick(self) -> None:
        if not self._running:
            return
        now = self._clock()
        seconds = self._elapsed_seconds_at(now)
        self._update_state(seconds, now)
        self.tick.emit(seconds)

    def _update_state(self, seconds: int, now: datetime) -> None:
        cfg = self._config
        if cfg.finish_time is not None and seconds >= cfg.finish_time:
            self._scheduler.stop()
            self._set_running(False)
            self._set_state(SignalState.FINISH, now)
            logger.info("Finish reached at %ss", seconds)
            return

        self._set_state(self.derive_state(cfg, seconds), now)

    @staticmethod
    def derive_state(config: ThresholdConfig, seconds: int) -> SignalState:
        """Highest ladder state reached after *seconds* (ignores finish)."""
        if seconds >= config.red_time:
            return SignalState.RED
        if seconds >= config.orange_time:
            return SignalState.ORANGE
        if seconds >= config.green_time:
            return SignalState.GREEN
        return SignalState.BLANK

    def _set_state(self, new_state: SignalState, stamp_at: datetime | None = None) -> None:
        """Commit *new_state* if it differs.  Stamps only when *stamp_at* given."""
        if new_state == self._state:
            return
        self._state = new_state
        if stamp_at is not None and self._timestamps[new_state] is None:
            self._timestamps[new_state] = stamp_at
        logger.debug("State → %s", new_state.value)
        self.state_changed.emit(new_state)
        self.changed.emit("state")

    def _set_running(self, running: bool) -> None:
        if running == self._running:
            return
        self._running = running
        self.running_changed.emit(running)
        self.changed.emit("is_running")

    def _clear_timestamps(self) -> None:
        for s in self._timestamps:
            self._timestamps[s] = None
