"""Health check routes."""

from __future__ import annotations

from flask import Blueprint, current_app

from lotto_picks.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Liveness probe; does not touch the document."""

    settings = current_app.extensions["settings"]
    return ok({"status": "ok", "store": settings.store_backend})
