"""Database package."""

from .db import get_session, init_db
from .models import Preset

__all__ = ["get_session", "init_db", "Preset"]
