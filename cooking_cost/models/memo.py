"""Memo model."""
from datetime import datetime

from sqlalchemy import Column, Integer, Text, TIMESTAMP

from . import Base


class Memo(Base):
    """Freeform kitchen notes."""

    __tablename__ = "memos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    updated_at = Column(TIMESTAMP, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Memo(id={self.id})>"
