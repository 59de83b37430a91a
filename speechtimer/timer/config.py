"""Threshold configurations and the built-in speech presets.

A configuration is valid when

    0 < green_time < orange_time < red_time

and, when a finish time is set, ``finish_time > red_time``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


@dataclass
class ThresholdConfig:
    """Named set of signal thresholds, all in seconds."""

    name: str
    green_time: int
    orange_time: int
    red_time: int
    finish_time: int | None = None  # None → timer runs on past red
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)
    last_used_at: datetime | None = None

    def validate(self) -> list[str]:
        """Return one message per broken ordering rule (empty when valid)."""
        errors: list[str] = []
        if self.green_time <= 0:
            errors.append("Green time must be greater than zero.")
        if self.orange_time <= self.green_time:
            errors.append("Orange time must be greater than Green time.")
        if self.red_time <= self.orange_time:
            errors.append("Red time must be greater than Orange time.")
        if self.finish_time is not None and self.finish_time <= self.red_time:
            errors.append("Finish time must be greater than Red time.")
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validate()


# ── presets ───────────────────────────────────────────────────────────────


class PresetType(Enum):
    TABLE_TOPICS = "table_topics"
    ICE_BREAKER = "ice_breaker"
    EVALUATION = "evaluation"
    PREPARED_SPEECH = "prepared_speech"
    CUSTOM = "custom"


# name, green, orange, red, finish
_PRESET_VALUES: dict[PresetType, tuple[str, int, int, int, int | None]] = {
    PresetType.TABLE_TOPICS: ("Table Topics", 60, 90, 120, 150),
    PresetType.ICE_BREAKER: ("Ice Breaker (4-6 min)", 240, 300, 360, 420),
    PresetType.EVALUATION: ("Evaluation (2-3 min)", 120, 150, 180, 210),
    PresetType.PREPARED_SPEECH: ("Prepared Speech (5-7 min)", 300, 360, 420, 480),
    PresetType.CUSTOM: ("Custom Speech", 180, 240, 300, None),
}

# Seeded into an empty preset store.
DEFAULT_PRESET_TYPES = (
    PresetType.TABLE_TOPICS,
    PresetType.ICE_BREAKER,
    PresetType.EVALUATION,
    PresetType.PREPARED_SPEECH,
)


def create_preset(preset_type: PresetType) -> ThresholdConfig:
    """Build a fresh configuration (new id) for a standard speech format."""
    name, green, orange, red, finish = _PRESET_VALUES[preset_type]
    return ThresholdConfig(
        name=name,
        green_time=green,
        orange_time=orange,
        red_time=red,
        finish_time=finish,
    )
