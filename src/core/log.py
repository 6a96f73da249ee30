"""Logging setup for the CLI and API entrypoints."""

from __future__ import annotations

import logging

from core.config import get_settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    resolved = (level or get_settings().log_level or "INFO").upper()
    logging.basicConfig(level=getattr(logging, resolved, logging.INFO), format=_FORMAT)


__all__ = ["configure_logging"]
