"""Application configuration and .env loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized runtime configuration."""

    data_dir: str = Field(default="data", validation_alias="FILING_DATA_DIR")
    api_tokens: list[str] = Field(
        default_factory=list, validation_alias="FILING_API_TOKENS"
    )
    log_level: str = Field(default="INFO", validation_alias="FILING_LOG_LEVEL")

    # US Letter, 1" margins
    page_width: float = Field(default=612.0, validation_alias="FILING_PAGE_WIDTH")
    page_height: float = Field(default=792.0, validation_alias="FILING_PAGE_HEIGHT")
    margin_top: float = Field(default=72.0, validation_alias="FILING_MARGIN_TOP")
    margin_bottom: float = Field(default=72.0, validation_alias="FILING_MARGIN_BOTTOM")
    margin_left: float = Field(default=72.0, validation_alias="FILING_MARGIN_LEFT")
    margin_right: float = Field(default=72.0, validation_alias="FILING_MARGIN_RIGHT")

    body_font_size: float = Field(default=12.0, validation_alias="FILING_BODY_FONT_SIZE")
    title_font_size: float = Field(
        default=14.0, validation_alias="FILING_TITLE_FONT_SIZE"
    )
    first_line_indent: float = Field(
        default=36.0, validation_alias="FILING_FIRST_LINE_INDENT"
    )
    list_indent: float = Field(default=18.0, validation_alias="FILING_LIST_INDENT")
    footer_font_size: float = Field(
        default=9.0, validation_alias="FILING_FOOTER_FONT_SIZE"
    )
    # Bates band sits at ~24pt, footer baseline stays above it.
    footer_baseline: float = Field(
        default=36.0, validation_alias="FILING_FOOTER_BASELINE"
    )
    signature_max_width: float = Field(
        default=240.0, validation_alias="FILING_SIGNATURE_MAX_WIDTH"
    )
    signature_max_height: float = Field(
        default=72.0, validation_alias="FILING_SIGNATURE_MAX_HEIGHT"
    )

    bates_stamper: str | None = Field(
        default=None, validation_alias="FILING_BATES_STAMPER"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once from .env/environment."""
    return Settings()


__all__ = ["Settings", "get_settings"]
