"""Filing settings carried by a draft: service, notary and proposed order."""

from __future__ import annotations

from typing import Any, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ServiceMethod = Literal[
    "certified_mail",
    "email",
    "efile_provider",
    "process_server",
    "publication",
    "other",
]

SERVICE_METHOD_LABELS: dict[str, str] = {
    "certified_mail": "certified mail",
    "email": "email",
    "efile_provider": "e-filing provider service",
    "process_server": "process server",
    "publication": "publication",
    "other": "other",
}

NotaryType = Literal["jurat", "acknowledgment"]


class _FilingModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ServiceRecipient(_FilingModel):
    name: Optional[str] = None
    address_or_email: Optional[str] = None
    # Free-form so unknown codes from older clients still load.
    method: Optional[str] = None
    details: Optional[str] = None


class ServiceSettings(_FilingModel):
    enabled: bool = False
    date: Optional[str] = None
    recipients: list[ServiceRecipient] = Field(default_factory=list)
    method_default: Optional[str] = None
    method_details: Optional[str] = None


class NotarySettings(_FilingModel):
    enabled: bool = False
    type: Optional[str] = None
    state: Optional[str] = None
    county: Optional[str] = None
    date: Optional[str] = None
    notary_name: Optional[str] = None
    commission_expires: Optional[str] = None


class ProposedOrderSettings(_FilingModel):
    enabled: bool = False
    title: Optional[str] = None
    judge_name: Optional[str] = None
    judge_title: Optional[str] = None
    date: Optional[str] = None


class FilingSettings(_FilingModel):
    ignored_issue_ids: list[str] = Field(default_factory=list)
    service: Optional[ServiceSettings] = None
    notary: Optional[NotarySettings] = None
    proposed_order: Optional[ProposedOrderSettings] = None

    @property
    def service_enabled(self) -> bool:
        return bool(self.service and self.service.enabled)

    @property
    def notary_enabled(self) -> bool:
        return bool(self.notary and self.notary.enabled)

    @property
    def proposed_order_enabled(self) -> bool:
        return bool(self.proposed_order and self.proposed_order.enabled)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def service_method_label(code: str | None) -> str:
    """Human-readable label for a service method code; unknown codes pass through."""
    cleaned = (code or "").strip()
    return SERVICE_METHOD_LABELS.get(cleaned, cleaned)


# Sub-sections are shallow-merged key by key. Lists inside them (recipients)
# and the top-level ignore list are replaced wholesale.
_MERGED_SECTIONS = ("service", "notary", "proposedOrder")


def merge_filing_settings(
    base: FilingSettings | Mapping[str, Any] | None,
    patch: FilingSettings | Mapping[str, Any] | None,
) -> FilingSettings:
    """Apply a partial settings patch on top of ``base``."""
    base_data = _as_payload(base)
    patch_data = _as_payload(patch)

    merged: dict[str, Any] = {**base_data, **patch_data}
    for key in _MERGED_SECTIONS:
        if key not in base_data and key not in patch_data:
            continue
        merged[key] = {**(base_data.get(key) or {}), **(patch_data.get(key) or {})}
    return FilingSettings.model_validate(merged)


def _as_payload(value: FilingSettings | Mapping[str, Any] | None) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, FilingSettings):
        value = FilingSettings.model_validate(dict(value))
    # exclude_unset keeps a partial patch from resetting untouched fields.
    return value.model_dump(by_alias=True, exclude_unset=True)


__all__ = [
    "FilingSettings",
    "NotarySettings",
    "NotaryType",
    "ProposedOrderSettings",
    "SERVICE_METHOD_LABELS",
    "ServiceMethod",
    "ServiceRecipient",
    "ServiceSettings",
    "merge_filing_settings",
    "service_method_label",
]
