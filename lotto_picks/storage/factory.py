"""Blob backend selection."""

from __future__ import annotations

from lotto_picks.config import Settings
from lotto_picks.errors import ConfigError
from lotto_picks.storage.blob import BlobStore, FileBlobStore, MemoryBlobStore


def build_blob_store(settings: Settings) -> BlobStore:
    backend = settings.store_backend
    if backend == "memory":
        return MemoryBlobStore()
    if backend == "file":
        return FileBlobStore(settings.data_dir)
    if backend == "s3":
        from lotto_picks.storage.s3 import S3BlobStore

        if not settings.bucket_name:
            raise ConfigError("Missing BUCKET_NAME for the s3 store backend")
        return S3BlobStore(settings.bucket_name, region=settings.aws_region)
    if backend == "sql":
        from lotto_picks.storage.sql import SqlBlobStore

        return SqlBlobStore.from_url(settings.database_url)
    raise ConfigError(f"Unknown STORE_BACKEND {backend!r}")
