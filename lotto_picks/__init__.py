"""Flask application package."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from flask import Flask

from lotto_picks.storage.blob import BlobStore


def create_app(overrides: Mapping[str, Any] | None = None, blob_store: BlobStore | None = None) -> Flask:
    """Application factory.

    Args:
        overrides: Config values applied on top of the environment config.
        blob_store: Pre-built document backend (tests); built from config otherwise.

    Returns:
        Configured Flask application.
    """
    load_dotenv()

    from lotto_picks.config import Settings, get_config
    from lotto_picks.cors import register_cors
    from lotto_picks.error_handlers import register_error_handlers
    from lotto_picks.logging_config import configure_logging
    from lotto_picks.repositories.entry_store import DocumentEntryStore
    from lotto_picks.routes.entries import entries_bp
    from lotto_picks.routes.health import health_bp
    from lotto_picks.services.entry_service import EntryService
    from lotto_picks.storage.factory import build_blob_store

    app = Flask(__name__)
    app.config.from_object(get_config())
    if overrides:
        app.config.update(overrides)

    configure_logging(app)

    settings = Settings.from_mapping(app.config)
    blobs = blob_store if blob_store is not None else build_blob_store(settings)
    store = DocumentEntryStore(blobs, settings)

    app.extensions["settings"] = settings
    app.extensions["entry_store"] = store
    app.extensions["entry_service"] = EntryService(store, settings)

    register_cors(app, settings)
    register_error_handlers(app)

    app.register_blueprint(health_bp)
    app.register_blueprint(entries_bp)
    app.register_blueprint(entries_bp, url_prefix="/api", name="api_entries")

    return app
