"""Error taxonomy shared by the compiler, analyzer and HTTP surface."""

from __future__ import annotations

from typing import Any, Iterable, Mapping


class FilingError(Exception):
    """Base error. ``status_code`` is what the API responds with."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthorizedError(FilingError):
    status_code = 401


class NotFoundError(FilingError):
    status_code = 404


class UpstreamDataError(FilingError):
    """A case/party/intake read failed; the message is surfaced verbatim."""

    status_code = 400


class InvalidInputError(FilingError):
    """A caller-supplied payload failed validation."""

    status_code = 422


class DependencyMissingError(FilingError):
    """The PDF primitive library or a configured collaborator could not be loaded."""

    status_code = 500


class LayoutConfigError(FilingError, ValueError):
    status_code = 500


def describe_validation_errors(errors: Iterable[Mapping[str, Any]]) -> str:
    """One-line summary of pydantic error dicts: ``loc: msg; loc: msg``."""
    parts = []
    for error in errors:
        loc = ".".join(str(part) for part in error.get("loc", ()))
        msg = str(error.get("msg", "invalid value"))
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid input"


__all__ = [
    "DependencyMissingError",
    "FilingError",
    "InvalidInputError",
    "LayoutConfigError",
    "NotFoundError",
    "UnauthorizedError",
    "UpstreamDataError",
    "describe_validation_errors",
]
