"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/SpeechTimer/settings.json

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "SpeechTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    tick_interval_ms: int = 100
    last_preset_id: str | None = None

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── diagnostics ───────────────────────────────────────────────────
    log_level: str = "INFO"


def _well_typed(data: dict) -> dict:
    """Keep known keys whose value matches the default's type."""
    if not isinstance(data, dict):
        raise ValueError("settings file is not a JSON object")
    defaults = Settings()
    kept = {}
    for f in fields(Settings):
        if f.name not in data:
            continue
        value = data[f.name]
        default = getattr(defaults, f.name)
        if default is None:
            ok = value is None or isinstance(value, str)
        else:
            ok = type(value) is type(default)  # bool is not an int here
        if ok:
            kept[f.name] = value
        else:
            logger.warning("Ignoring setting %s=%r (wrong type)", f.name, value)
    return kept


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            return Settings(**_well_typed(data))
    except (OSError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
