"""Saved threshold presets, stored in the ``presets`` table.

Storage failures never reach the caller: they are logged and the call
degrades to an empty result (``[]``, ``None`` or ``False``).

Usage::

    ensure_defaults()
    for cfg in list_configs():
        print(cfg.name)
"""

from __future__ import annotations

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from .database.db import get_session
from .database.models import Preset
from .errors import ValidationError
from .timer.config import DEFAULT_PRESET_TYPES, ThresholdConfig, create_preset

logger = logging.getLogger(__name__)


# ── row ⇄ config ──────────────────────────────────────────────────────────


def _to_config(row: Preset) -> ThresholdConfig:
    return ThresholdConfig(
        id=row.id,
        name=row.name,
        green_time=row.green_time,
        orange_time=row.orange_time,
        red_time=row.red_time,
        finish_time=row.finish_time,
        created_at=row.created_at,
        last_used_at=row.last_used_at,
    )


def _copy_into(row: Preset, config: ThresholdConfig) -> None:
    row.name = config.name
    row.green_time = config.green_time
    row.orange_time = config.orange_time
    row.red_time = config.red_time
    row.finish_time = config.finish_time
    row.created_at = config.created_at
    row.last_used_at = config.last_used_at


# ── public API ────────────────────────────────────────────────────────────


def list_configs() -> list[ThresholdConfig]:
    """All saved presets in the order they were first saved."""
    try:
        with get_session() as db:
            rows = db.query(Preset).order_by(Preset.position).all()
            return [_to_config(r) for r in rows]
    except SQLAlchemyError:
        logger.exception("Could not read presets")
        return []


def get_config(config_id: str) -> ThresholdConfig | None:
    try:
        with get_session() as db:
            row = db.get(Preset, config_id)
            return _to_config(row) if row else None
    except SQLAlchemyError:
        logger.exception("Could not read preset %s", config_id)
        return None


def find_by_name(name: str) -> ThresholdConfig | None:
    """First preset whose name matches *name*, ignoring case.

    Names are folded in Python; SQLite's ``lower()`` only folds ASCII.
    """
    wanted = name.strip().casefold()
    try:
        with get_session() as db:
            rows = db.query(Preset).order_by(Preset.position).all()
            for row in rows:
                if row.name.casefold() == wanted:
                    return _to_config(row)
            return None
    except SQLAlchemyError:
        logger.exception("Could not look up preset %r", name)
        return None


def save_config(config: ThresholdConfig) -> bool:
    """Insert or update *config* by id.

    Raises :class:`ValidationError` for a malformed config; returns False
    when storage fails.
    """
    errors = config.validate()
    if errors:
        raise ValidationError(errors)
    try:
        with get_session() as db:
            row = db.get(Preset, config.id)
            if row is None:
                last = db.query(func.max(Preset.position)).scalar()
                row = Preset(id=config.id, position=0 if last is None else last + 1)
                db.add(row)
            _copy_into(row, config)
        return True
    except SQLAlchemyError:
        logger.exception("Could not save preset %r", config.name)
        return False


def delete_config(config_id: str) -> bool:
    """Remove a preset.  True when something was deleted."""
    try:
        with get_session() as db:
            row = db.get(Preset, config_id)
            if row is None:
                return False
            db.delete(row)
        return True
    except SQLAlchemyError:
        logger.exception("Could not delete preset %s", config_id)
        return False


def ensure_defaults() -> bool:
    """Seed the standard speech presets into an empty store.

    Returns True when presets were added.
    """
    try:
        with get_session() as db:
            if db.query(Preset).count() > 0:
                return False
            for position, preset_type in enumerate(DEFAULT_PRESET_TYPES):
                config = create_preset(preset_type)
                row = Preset(id=config.id, position=position)
                _copy_into(row, config)
                db.add(row)
        logger.info("Seeded %d default presets", len(DEFAULT_PRESET_TYPES))
        return True
    except SQLAlchemyError:
        logger.exception("Could not seed default presets")
        return False
