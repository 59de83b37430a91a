"""Tick sources and clocks for :class:`~speechtimer.timer.engine.TimerSession`.

The session never builds its own timer loop; it receives a
:class:`TickScheduler` and a clock callable.  In the app that is a
``QTimer`` plus ``datetime.now``.  Tests swap in
:class:`ManualTickScheduler` and :class:`VirtualClock` so time only moves
when the test says so.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable

from PyQt6.QtCore import QObject, QTimer


DEFAULT_TICK_INTERVAL_MS = 100


class TickScheduler(ABC):
    """Recurring fire-and-forget callback that can be started and stopped."""

    def __init__(self) -> None:
        self._callback: Callable[[], None] | None = None

    def bind(self, callback: Callable[[], None]) -> None:
        self._callback = callback

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @property
    @abstractmethod
    def is_active(self) -> bool: ...


class QtTickScheduler(TickScheduler):
    """Drives ticks from a ``QTimer`` on the owning thread's event loop."""

    def __init__(
        self,
        interval_ms: int = DEFAULT_TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__()
        self._qt_timer = QTimer(parent)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def start(self) -> None:
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()


class ManualTickScheduler(TickScheduler):
    """Scheduler that only ticks when :meth:`fire` is called."""

    def __init__(self) -> None:
        super().__init__()
        self._active = False
        self.fired = 0

    def start(self) -> None:
        self._active = True

    def stop(self) -> None:
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def fire(self) -> bool:
        """Run one tick.  Returns False (and does nothing) when stopped."""
        if not self._active or self._callback is None:
            return False
        self.fired += 1
        self._callback()
        return True


class VirtualClock:
    """A ``datetime.now`` stand-in that only moves when advanced.

    Usage::

        clock = VirtualClock()
        session = TimerSession(clock=clock, scheduler=ManualTickScheduler())
        clock.advance(61)
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2024, 1, 1, 9, 0, 0)

    def __call__(self) -> datetime:
        return self._now

    def advance(self, seconds: float) -> datetime:
        self._now += timedelta(seconds=seconds)
        return self._now

    def set(self, instant: datetime) -> None:
        self._now = instant
