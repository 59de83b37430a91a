"""Shared test helpers for SpeechTimer."""

from speechtimer.timer.engine import TimerSession
from speechtimer.timer.scheduling import ManualTickScheduler, VirtualClock


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def advance_to(
    session: TimerSession,
    clock: VirtualClock,
    scheduler: ManualTickScheduler,
    seconds: float,
) -> None:
    """Move the clock so the running session reads *seconds* elapsed, then tick."""
    clock.advance(seconds - session.elapsed_time().total_seconds())
    scheduler.fire()
