"""Environment-based configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from lotto_picks.errors import ConfigError

STORE_BACKENDS = ("memory", "file", "s3", "sql")
DEFAULT_MAX_ENTRIES = 1000


def resolve_store_backend() -> str:
    """Resolve the blob backend.

    Priority:
      1) STORE_BACKEND (explicit)
      2) "s3" when BUCKET_NAME is set
      3) Fallback to local files
    """

    explicit = (os.getenv("STORE_BACKEND") or "").lower().strip()
    if explicit:
        return explicit
    if os.getenv("BUCKET_NAME"):
        return "s3"
    return "file"


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    STORE_BACKEND: str = resolve_store_backend()  # "memory" | "file" | "s3" | "sql"
    PREFIX: str = os.getenv("PREFIX", "entries/")
    MAX_ENTRIES: str = os.getenv("MAX_ENTRIES", str(DEFAULT_MAX_ENTRIES))
    CORS_ALLOW_ORIGIN: str = os.getenv("CORS_ALLOW_ORIGIN", "*")

    # S3 backend
    BUCKET_NAME: str | None = os.getenv("BUCKET_NAME")
    AWS_REGION: str | None = os.getenv("AWS_REGION")

    # File backend
    DATA_DIR: str = os.getenv("DATA_DIR", "./data")

    # SQL backend
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./app.db")


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    return DevelopmentConfig


def _parse_max_entries(raw: Any) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_MAX_ENTRIES
    return value if value >= 1 else DEFAULT_MAX_ENTRIES


@dataclass(frozen=True)
class Settings:
    """Explicit runtime settings handed to the store, service and CORS hook."""

    store_backend: str = "file"
    data_key: str = "entries/entries.json"
    max_entries: int = DEFAULT_MAX_ENTRIES
    allow_origin: str = "*"
    default_limit: int = 10
    max_limit: int = 100

    bucket_name: str | None = None
    aws_region: str | None = None
    data_dir: str = "./data"
    database_url: str = "sqlite:///./app.db"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> Settings:
        """Build settings from a Flask config (or any mapping of the same keys)."""

        backend = str(config.get("STORE_BACKEND") or "file").lower().strip()
        if backend not in STORE_BACKENDS:
            raise ConfigError(f"Unknown STORE_BACKEND {backend!r} (expected one of {', '.join(STORE_BACKENDS)})")

        bucket = config.get("BUCKET_NAME") or None
        if backend == "s3" and not bucket:
            raise ConfigError("Missing BUCKET_NAME for the s3 store backend")

        prefix = str(config.get("PREFIX") if config.get("PREFIX") is not None else "entries/")
        return cls(
            store_backend=backend,
            data_key=f"{prefix}entries.json",
            max_entries=_parse_max_entries(config.get("MAX_ENTRIES", DEFAULT_MAX_ENTRIES)),
            allow_origin=str(config.get("CORS_ALLOW_ORIGIN") or "*"),
            bucket_name=bucket,
            aws_region=config.get("AWS_REGION") or None,
            data_dir=str(config.get("DATA_DIR") or "./data"),
            database_url=str(config.get("DATABASE_URL") or "sqlite:///./app.db"),
        )
