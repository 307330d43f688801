"""User model.

Users are seeded at startup; there is no login flow, so the password column
is stored exactly as given.
"""

from sqlalchemy import Column, DateTime, Integer, String, Text
from ..database import Base


class User(Base):
    """Account owning toolkits, assets and tags.

    Roles: road_captain, wrench, prospect (default).
    """

    __tablename__ = "users"
    # Keeps SQLite from reusing ids of deleted rows.
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True)
    password = Column(Text, nullable=False)
    role = Column(String(20), nullable=False, default="prospect")
    created_at = Column(DateTime(timezone=True), nullable=False)
