"""Cross-origin and caching headers applied to every response."""

from __future__ import annotations

from flask import Flask, Response, request

from lotto_picks.config import Settings


def register_cors(app: Flask, settings: Settings) -> None:
    """Answer preflight probes early and stamp API headers on every response."""

    @app.before_request
    def _preflight():  # type: ignore[no-untyped-def]
        # Runs before dispatch, so OPTIONS never reaches routing or business logic.
        if request.method == "OPTIONS":
            return Response("", status=204)
        return None

    @app.after_request
    def _api_headers(response: Response) -> Response:
        response.headers["Content-Type"] = "application/json"
        response.headers["Access-Control-Allow-Origin"] = settings.allow_origin
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET,POST,PUT,OPTIONS"
        response.headers["Cache-Control"] = "no-store"
        return response
