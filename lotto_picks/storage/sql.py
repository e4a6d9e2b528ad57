"""SQL-backed blob store: one row per document key."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from lotto_picks.db import create_app_engine, init_schema
from lotto_picks.errors import StorageUnavailableError
from lotto_picks.models.document import StoredDocument


class SqlBlobStore:
    """Stores each document as a single ``documents`` row.

    A write is one upsert committed in its own transaction, so readers see the
    previous or the new body.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    @classmethod
    def from_url(cls, database_url: str) -> SqlBlobStore:
        engine = create_app_engine(database_url)
        init_schema(engine)
        return cls(engine)

    def read(self, key: str) -> str | None:
        try:
            with self._session_factory() as session:
                doc = session.get(StoredDocument, key)
                return None if doc is None else doc.body
        except SQLAlchemyError as e:
            raise StorageUnavailableError(
                "Could not read document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e

    def write(self, key: str, text: str, content_type: str) -> None:
        try:
            with self._session_factory() as session, session.begin():
                session.merge(
                    StoredDocument(
                        key=key,
                        body=text,
                        content_type=content_type,
                        updated_at=datetime.now(timezone.utc),
                    )
                )
        except SQLAlchemyError as e:
            raise StorageUnavailableError(
                "Could not write document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e

    def describe(self) -> str:
        return f"sql:{self._engine.url.render_as_string(hide_password=True)}"
