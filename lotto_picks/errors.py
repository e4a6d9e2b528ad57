"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class ConfigError(Exception):
    """Invalid or incomplete configuration detected at startup."""


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class NotFoundError(AppError):
    """Resource not found."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="not_found", message=message, status_code=404, details=details)


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class InvalidRequestBodyError(AppError):
    """Request body is not well-formed JSON (or not a JSON object)."""

    def __init__(self, message: str = "Invalid JSON", details: Any | None = None) -> None:
        super().__init__(code="invalid_request_body", message=message, status_code=400, details=details)


class UnsupportedRouteError(AppError):
    """No route matches the method and path."""

    def __init__(self, message: str = "Not found", details: Any | None = None) -> None:
        super().__init__(code="unsupported_route", message=message, status_code=404, details=details)


class StorageUnavailableError(AppError):
    """Reading or writing the entries document failed.

    ``details`` carries backend/key context for logs only; it is never sent to
    clients.
    """

    def __init__(self, message: str = "Storage unavailable", details: Any | None = None) -> None:
        super().__init__(code="storage_unavailable", message=message, status_code=500, details=details)


class DocumentDecodeError(StorageUnavailableError):
    """The stored document exists but cannot be decoded."""
