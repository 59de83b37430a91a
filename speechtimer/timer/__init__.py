"""Timer package."""

from .config import (
    ThresholdConfig,
    PresetType,
    DEFAULT_PRESET_TYPES,
    create_preset,
)
from .engine import TimerSession, SignalState
from .scheduling import (
    TickScheduler,
    QtTickScheduler,
    ManualTickScheduler,
    VirtualClock,
    DEFAULT_TICK_INTERVAL_MS,
)

__all__ = [
    "ThresholdConfig",
    "PresetType",
    "DEFAULT_PRESET_TYPES",
    "create_preset",
    "TimerSession",
    "SignalState",
    "TickScheduler",
    "QtTickScheduler",
    "ManualTickScheduler",
    "VirtualClock",
    "DEFAULT_TICK_INTERVAL_MS",
]
