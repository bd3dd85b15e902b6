"""SQLAlchemy ORM models for PomoTimer."""

from sqlalchemy import Column, String, Text
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Preference(Base):
    """Flat key/value row.  Holds settings and the serialized history."""

    __tablename__ = "preferences"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Preference key={self.key} size={len(self.value or '')}>"
