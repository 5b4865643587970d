"""SEO metadata extraction: title, canonical, charset, language, meta tags, hreflang."""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Final, Optional

from bs4.element import Tag

from page_signals.logger import logger
from page_signals.models import MetaMap, SeoMetas
from page_signals.parser.dom import PageDocument

__all__: Sequence[str] = (
    "GENERAL_META_KEYS",
    "OPEN_GRAPH_KEYS",
    "TWITTER_CARD_KEYS",
    "PageMetadata",
    "extract_meta",
    "extract_metadata",
)

GENERAL_META_KEYS: Final[tuple[str, ...]] = ("description", "keywords", "author", "robots", "viewport")
OPEN_GRAPH_KEYS: Final[tuple[str, ...]] = ("og:title", "og:description", "og:image", "og:type", "og:url")
TWITTER_CARD_KEYS: Final[tuple[str, ...]] = (
    "twitter:card",
    "twitter:title",
    "twitter:description",
    "twitter:image",
    "twitter:site",
)

_CHARSET_PARAM_RE = re.compile(r"charset\s*=\s*[\"']?([^\s;\"']+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class PageMetadata:
    page_title: Optional[str]
    canonical: Optional[str]
    charset: Optional[str]
    content_language: Optional[str]
    seo_metas: SeoMetas
    hreflang: tuple[str, ...]


def _has_rel(tag: Tag, value: str) -> bool:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return value in (r.lower() for r in rel)


def extract_meta(document: PageDocument, names: Iterable[str]) -> MetaMap:
    """``content`` of ``<meta name=…>`` (or ``property=…``) for each key, None if missing."""
    values: MetaMap = {}
    for name in names:
        tag = document.soup.find("meta", attrs={"name": name})
        if tag is None:
            tag = document.soup.find("meta", attrs={"property": name})
        content = tag.get("content") if tag is not None else None
        values[name] = None if content is None else str(content)
    return values


def extract_canonical(document: PageDocument) -> Optional[str]:
    for link in document.soup.find_all("link"):
        if _has_rel(link, "canonical"):
            href = link.get("href")
            return document.resolve(str(href)) if href is not None else None
    return None


def extract_charset(document: PageDocument) -> Optional[str]:
    meta = document.soup.find("meta", attrs={"charset": True})
    if meta is not None:
        return str(meta["charset"]).strip()
    content_type = document.http_equiv("content-type")
    if content_type is not None:
        match = _CHARSET_PARAM_RE.search(str(content_type.get("content") or ""))
        if match:
            return match.group(1)
    return None


def extract_content_language(document: PageDocument) -> Optional[str]:
    meta = document.http_equiv("content-language")
    if meta is not None:
        content = str(meta.get("content") or "").strip()
        if content:
            return content
    return document.lang or None


def extract_hreflang(document: PageDocument) -> tuple[str, ...]:
    """``"<lang>:<absolute href>"`` for every alternate-language link, in document order."""
    entries: list[str] = []
    for link in document.soup.find_all("link", attrs={"hreflang": True}):
        if not _has_rel(link, "alternate"):
            continue
        href = link.get("href")
        href = document.resolve(str(href)) if href is not None else ""
        entries.append(f"{link['hreflang']}:{href}")
    return tuple(entries)


def extract_metadata(document: PageDocument) -> PageMetadata:
    seo_metas = SeoMetas(
        general=extract_meta(document, GENERAL_META_KEYS),
        open_graph=extract_meta(document, OPEN_GRAPH_KEYS),
        twitter_card=extract_meta(document, TWITTER_CARD_KEYS),
    )
    metadata = PageMetadata(
        page_title=document.title or None,
        canonical=extract_canonical(document),
        charset=extract_charset(document),
        content_language=extract_content_language(document),
        seo_metas=seo_metas,
        hreflang=extract_hreflang(document),
    )
    logger.debug(
        "Metadata: title=%r canonical=%r hreflang=%d",
        metadata.page_title,
        metadata.canonical,
        len(metadata.hreflang),
    )
    return metadata
