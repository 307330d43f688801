"""Tag catalog model."""

from sqlalchemy import Column, DateTime, Integer, String
from ..database import Base


class Tag(Base):

    __tablename__ = "tags"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True)
    color = Column(String(32), nullable=False, default="#6b7280")
    user_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
