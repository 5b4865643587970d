# File: page_signals/models.py
"""
Data models for PageSignals reports.

Python attributes are snake_case; aliases carry the interchange field names
(``statusCode``, ``fullPage_words``, ``jsonLdList`` …) that exported JSON and
CSV use.  :meth:`PageReport.to_dict` always dumps by alias.
"""
from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

__all__ = [
    "JsonLdEntry",
    "MetaMap",
    "NOT_AVAILABLE",
    "PageReport",
    "RenderType",
    "SeoMetas",
    "StatusCode",
    "utc_timestamp",
]

NOT_AVAILABLE = "N/A"

MetaMap = Dict[str, Optional[str]]
StatusCode = Union[int, Literal["N/A"]]


class RenderType(str, Enum):
    """How the visible content reached the page."""

    CSR = "CSR"
    SSR = "SSR"


class JsonLdEntry(BaseModel):
    """One JSON-LD block: its trimmed source and the types it declares."""

    model_config = ConfigDict(frozen=True)

    raw: str
    types: Tuple[str, ...] = Field(..., min_length=1)


class SeoMetas(BaseModel):
    """SEO meta tags by category; every declared key is present, missing ones are None."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    general: MetaMap
    open_graph: MetaMap = Field(alias="openGraph")
    twitter_card: MetaMap = Field(alias="twitterCard")


class PageReport(BaseModel):
    """Immutable result of analysing one page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    timestamp: str
    status_code: StatusCode = Field(alias="statusCode")
    render_type: RenderType = Field(alias="renderType")
    page_title: Optional[str] = Field(alias="pageTitle")
    canonical: Optional[str]
    charset: Optional[str]
    content_language: Optional[str] = Field(alias="contentLanguage")
    seo_metas: SeoMetas = Field(alias="seoMetas")
    hreflang: Tuple[str, ...]
    full_page_characters: int = Field(ge=0, alias="fullPage_characters")
    full_page_words: int = Field(ge=0, alias="fullPage_words")
    main_content_characters: int = Field(ge=0, alias="mainContent_characters")
    main_content_words: int = Field(ge=0, alias="mainContent_words")
    json_ld_list: Tuple[JsonLdEntry, ...] = Field(alias="jsonLdList")

    @model_validator(mode="after")
    def _main_within_full(self) -> PageReport:
        if (
            self.main_content_characters > self.full_page_characters
            or self.main_content_words > self.full_page_words
        ):
            raise ValueError("main content counts exceed full page counts")
        return self

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready mapping with the interchange field names."""
        return self.model_dump(mode="json", by_alias=True)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. ``2024-05-01T10:00:00.000Z``."""
    moment = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
