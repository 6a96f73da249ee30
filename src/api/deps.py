"""Request-scoped dependencies: auth and collaborators built from settings."""

from __future__ import annotations

import logging
from typing import Annotated, Optional

from fastapi import Depends, Header

from compiler.bates import BatesStamper, load_stamper
from compiler.layout import LayoutOptions
from core.config import Settings, get_settings
from core.errors import UnauthorizedError
from persistence.contracts import CaseRepository, SignatureStore
from persistence.fs_store import FsCaseRepository, FsSignatureStore

logger = logging.getLogger(__name__)

SettingsDep = Annotated[Settings, Depends(get_settings)]


def require_token(
    settings: SettingsDep,
    authorization: Annotated[Optional[str], Header()] = None,
) -> None:
    """Bearer-token check; an empty token list disables auth."""
    if not settings.api_tokens:
        return
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or token.strip() not in settings.api_tokens:
        raise UnauthorizedError("Unauthorized")


def get_repository(settings: SettingsDep) -> CaseRepository:
    return FsCaseRepository(settings.data_dir)


def get_signature_store(settings: SettingsDep) -> SignatureStore:
    return FsSignatureStore(settings.data_dir)


def get_layout_options(settings: SettingsDep) -> LayoutOptions:
    return LayoutOptions.from_settings(settings)


def get_stamper(settings: SettingsDep) -> Optional[BatesStamper]:
    return load_stamper(settings.bates_stamper)


__all__ = [
    "get_layout_options",
    "get_repository",
    "get_signature_store",
    "get_stamper",
    "require_token",
]
