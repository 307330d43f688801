"""Asset model: one uploaded file plus its catalog metadata."""

from sqlalchemy import BigInteger, Column, DateTime, Float, Integer, JSON, String, Text
from ..database import Base


class Asset(Base):
    """Stored file record.

    ``tags`` is a JSON list of free-text strings, not references to the
    ``tags`` table. ``extra_metadata`` maps to the ``metadata`` column;
    ``metadata`` itself is reserved on declarative classes.
    """

    __tablename__ = "assets"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)

    # File identity
    name = Column(String(512), nullable=False)
    original_name = Column(String(512), nullable=False)
    file_type = Column(String(20), nullable=False)
    mime_type = Column(String(255), nullable=False)
    size = Column(BigInteger, nullable=False)
    file_path = Column(Text, nullable=False)
    thumbnail_path = Column(Text, nullable=True)

    # Media dimensions (never probed, kept for clients that set them)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    duration = Column(Float, nullable=True)

    # Placement and ownership
    folder_id = Column(Integer, nullable=True, index=True)
    toolkit_id = Column(Integer, nullable=False, index=True)
    user_id = Column(Integer, nullable=False, index=True)

    # Labels
    tags = Column(JSON, nullable=False, default=list)
    status = Column(String(255), nullable=False, default="")
    extra_metadata = Column("metadata", JSON, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
