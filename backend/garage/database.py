"""Engine and declarative base for the SQL storage backend."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

_IN_MEMORY_SQLITE = ("sqlite://", "sqlite:///:memory:")

# Create base class for models
Base = declarative_base()


def is_in_memory(database_url: str) -> bool:
    """True when the URL names a private in-memory SQLite database."""
    return database_url in _IN_MEMORY_SQLITE


def make_engine(database_url: str) -> Engine:
    """Create an engine tuned for the given database.

    An in-memory SQLite database exists once per connection, so every
    session must share a single connection (StaticPool) for the data to
    be visible across requests.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if is_in_memory(database_url):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, **kwargs)

    # Detects stale connections before use.
    return create_engine(database_url, pool_pre_ping=True)
