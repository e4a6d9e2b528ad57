"""Helpers for consistent JSON responses."""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify


def ok(data: Any, status_code: int = 200) -> tuple[Response, int]:
    """Success response; ``data`` is the whole JSON body."""

    return jsonify(data), status_code


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> tuple[Response, int]:
    """Error response."""

    return jsonify({"error": message, "code": code, "details": details}), status_code
