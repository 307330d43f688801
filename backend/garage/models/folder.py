"""Folder model: a grouping of assets inside one toolkit."""

from sqlalchemy import Column, DateTime, Integer, String
from ..database import Base


class Folder(Base):

    __tablename__ = "folders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    toolkit_id = Column(Integer, nullable=False, index=True)

    # Nesting is stored but nothing walks it yet.
    parent_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
