"""Locale-aware character and word counting.

Word counting depends on a single page-level decision: whether the page is
predominantly Chinese.  For such pages every CJK ideograph counts as one
word-equivalent unit; for everything else words are whitespace-delimited
tokens.  Characters are always the length of the rendered text.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from page_signals.logger import logger
from page_signals.parser.dom import PageDocument

__all__: Sequence[str] = (
    "CJK_RATIO_THRESHOLD",
    "TextMetrics",
    "cjk_ratio",
    "clamp_to_full",
    "count_chars_and_words",
    "is_chinese_page",
)

#: share of ideographs among non-whitespace characters above which a page is CJK
CJK_RATIO_THRESHOLD: Final[float] = 0.3
_CJK_LANG_PREFIX: Final[str] = "zh"

_CJK_IDEOGRAPH_RE = re.compile(r"[\u4e00-\u9fff]")
_WS_RE = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class TextMetrics:
    chars: int
    words: int


def _count_ideographs(text: str) -> int:
    return len(_CJK_IDEOGRAPH_RE.findall(text))


def cjk_ratio(text: str) -> float:
    """Fraction of CJK ideographs among the non-whitespace characters of *text*."""
    visible = len(_WS_RE.sub("", text)) or 1
    return _count_ideographs(text) / visible


def _content_language_meta(document: PageDocument) -> str:
    meta = document.http_equiv("content-language")
    return "" if meta is None else str(meta.get("content") or "").strip()


def is_chinese_page(document: PageDocument, full_text: str) -> bool:
    """Decide once per page whether words are counted as ideographs.

    Signals, first hit wins: root ``lang`` starting with ``zh``, a
    ``Content-Language`` meta starting with ``zh``, then the ideograph ratio of
    *full_text* exceeding :data:`CJK_RATIO_THRESHOLD`.
    """
    if document.lang.lower().startswith(_CJK_LANG_PREFIX):
        logger.debug("CJK page: root lang=%r", document.lang)
        return True

    meta_lang = _content_language_meta(document)
    if meta_lang.lower().startswith(_CJK_LANG_PREFIX):
        logger.debug("CJK page: Content-Language meta=%r", meta_lang)
        return True

    ratio = cjk_ratio(full_text)
    logger.debug("CJK ideograph ratio %.3f", ratio)
    return ratio > CJK_RATIO_THRESHOLD


def count_chars_and_words(text: str, is_chinese: bool) -> TextMetrics:
    if is_chinese:
        words = _count_ideographs(text)
    else:
        words = len(text.split())
    return TextMetrics(chars=len(text), words=words)


def clamp_to_full(main: TextMetrics, full: TextMetrics) -> TextMetrics:
    """Main content can never be larger than the page it was taken from."""
    if main.chars > full.chars or main.words > full.words:
        logger.debug("Main content %s exceeds full page %s, clamping", main, full)
        return full
    return main
