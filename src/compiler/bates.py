"""Hand-off to the external Bates-stamping collaborator.

Only the seam lives here: parsing the request parameters and resolving the
configured stamper. The overlay itself is supplied by the deployment through
``FILING_BATES_STAMPER`` (``package.module:callable``).
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from importlib import import_module
from typing import Optional, Protocol

from core.errors import DependencyMissingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatesOptions:
    prefix: str
    start: int
    width: int


class BatesStamper(Protocol):
    def __call__(self, pdf_bytes: bytes, options: BatesOptions) -> bytes: ...


def parse_bates_options(
    prefix: str | None,
    start: str | int | float | None,
    width: str | int | float | None,
) -> Optional[BatesOptions]:
    """Return options only when all three parameters are present and valid."""
    cleaned_prefix = (prefix or "").strip()
    start_value = _positive_int(start)
    width_value = _positive_int(width)
    if not cleaned_prefix or start_value is None or width_value is None:
        return None
    return BatesOptions(prefix=cleaned_prefix, start=start_value, width=width_value)


def load_stamper(target: str | None) -> Optional[BatesStamper]:
    if not target:
        return None
    module_path, _, attr = target.partition(":")
    try:
        module = import_module(module_path)
        return getattr(module, attr or "stamp")
    except (ImportError, AttributeError) as exc:
        raise DependencyMissingError(f"Bates stamper not available: {target}") from exc


def apply_bates(
    pdf_bytes: bytes,
    options: BatesOptions | None,
    stamper: BatesStamper | None,
) -> bytes:
    if options is None:
        return pdf_bytes
    if stamper is None:
        logger.warning(
            "Bates parameters given (prefix=%s) but no stamper is configured; skipping",
            options.prefix,
        )
        return pdf_bytes
    return stamper(pdf_bytes, options)


def _positive_int(raw: str | int | float | None) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = float(str(raw).strip())
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0 or not value.is_integer():
        return None
    return int(value)


__all__ = [
    "BatesOptions",
    "BatesStamper",
    "apply_bates",
    "load_stamper",
    "parse_bates_options",
]
