"""Toolkit model: the top-level collection a user owns."""

from sqlalchemy import Column, DateTime, Integer, String, Text
from ..database import Base


class Toolkit(Base):

    __tablename__ = "toolkits"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Plain integer, not a foreign key: deleting a user or toolkit never
    # cascades and dangling references are reported at read time.
    user_id = Column(Integer, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
