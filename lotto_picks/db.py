"""SQLAlchemy engine setup for the SQL document backend."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from lotto_picks.models.base import Base


def create_app_engine(database_url: str) -> Engine:
    url = make_url(database_url)

    # In-memory SQLite must share one connection or every session sees an empty DB.
    if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            future=True,
        )

    return create_engine(database_url, pool_pre_ping=True, future=True)


def init_schema(engine: Engine) -> None:
    """Create the documents table if missing (production would use migrations)."""

    Base.metadata.create_all(bind=engine)
