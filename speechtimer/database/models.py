"""SQLAlchemy ORM models for SpeechTimer."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Preset(Base):
    """A saved threshold configuration (all times in seconds)."""

    __tablename__ = "presets"

    id = Column(String(36), primary_key=True)
    position = Column(Integer, nullable=False, default=0)  # list order
    name = Column(String(255), nullable=False)
    green_time = Column(Integer, nullable=False)
    orange_time = Column(Integer, nullable=False)
    red_time = Column(Integer, nullable=False)
    finish_time = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    last_used_at = Column(DateTime, nullable=True)

    def __repr__(self) -> str:
        return (
            f"<Preset id={self.id} name={self.name!r} "
            f"g/o/r={self.green_time}/{self.orange_time}/{self.red_time}>"
        )
