"""Whole-document blob backends.

A blob store reads and writes one text document per key. ``read`` returns
``None`` when the document has never been written; every other failure is a
``StorageUnavailableError``. Writes replace the whole document and are
presented atomically: a reader sees either the old or the new text.
"""

from __future__ import annotations

import logging
import os
import tempfile
from threading import Lock
from typing import Protocol

from lotto_picks.errors import StorageUnavailableError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    def read(self, key: str) -> str | None: ...

    def write(self, key: str, text: str, content_type: str) -> None: ...

    def describe(self) -> str: ...


class MemoryBlobStore:
    """Process-local blob store.

    Only for tests and single-process development: documents vanish with the
    process.
    """

    def __init__(self, documents: dict[str, str] | None = None) -> None:
        self._lock = Lock()
        self._documents: dict[str, str] = dict(documents or {})
        self.content_types: dict[str, str] = {}

    def read(self, key: str) -> str | None:
        with self._lock:
            return self._documents.get(key)

    def write(self, key: str, text: str, content_type: str) -> None:
        with self._lock:
            self._documents[key] = text
            self.content_types[key] = content_type

    def describe(self) -> str:
        return "memory"


class FileBlobStore:
    """One file per key under ``root``; writes go through write-then-rename."""

    def __init__(self, root: str) -> None:
        self._root = os.path.abspath(root)

    def path_for(self, key: str) -> str:
        parts = [p for p in key.replace("\\", "/").split("/") if p not in ("", ".", "..")]
        if not parts:
            raise StorageUnavailableError("Invalid document key", details={"key": key})
        return os.path.join(self._root, *parts)

    def read(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            with open(path, "r", encoding="utf-8") as fh:
                return fh.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageUnavailableError(
                "Could not read document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e

    def write(self, key: str, text: str, content_type: str) -> None:
        path = self.path_for(key)
        dir_name = os.path.dirname(path)
        try:
            os.makedirs(dir_name, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=dir_name, suffix=".tmp")
        except OSError as e:
            raise StorageUnavailableError(
                "Could not write document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
            os.replace(tmp_path, path)
        except OSError as e:
            try:
                os.unlink(tmp_path)
            except OSError:
                logger.warning("Could not remove temp file %s", tmp_path)
            raise StorageUnavailableError(
                "Could not write document",
                details={"backend": self.describe(), "key": key, "error": str(e)},
            ) from e

    def describe(self) -> str:
        return f"file:{self._root}"
