# File: page_signals/assembler.py
"""page_signals.assembler: Сборка итогового PageReport из одного снимка DOM.

Сборка выполняется по принципу «всё или ничего»: ожидаемые неровности
(отсутствующие теги, неверные селекторы, битый JSON-LD) экстракторы
обрабатывают сами, а любая непредвиденная ошибка превращается в
ExtractionFailed, и частичный отчёт не возвращается.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional, TypeVar

from page_signals.config import AnalyzerConfig
from page_signals.errors import ExtractionFailed, NoTargetContext, PageSignalsError
from page_signals.logger import logger
from page_signals.models import PageReport, StatusCode, utc_timestamp
from page_signals.parser.dom import PageDocument, rendered_text
from page_signals.parser.main_content import isolate_main
from page_signals.parser.metadata import extract_metadata
from page_signals.parser.render_type import classify
from page_signals.parser.structured_data import extract_jsonld
from page_signals.parser.text_metrics import (
    TextMetrics,
    clamp_to_full,
    count_chars_and_words,
    is_chinese_page,
)

__all__ = ["assemble"]

_T = TypeVar("_T")


def _step(name: str, func: Callable[..., _T], *args: object) -> _T:
    """Выполняет шаг экстракции, заворачивая непредвиденные ошибки в ExtractionFailed."""
    try:
        return func(*args)
    except PageSignalsError:
        raise
    except Exception as exc:
        logger.error("Extraction step %s failed: %s", name, exc)
        raise ExtractionFailed(name, exc) from exc


def _content_metrics(
    document: PageDocument, config: AnalyzerConfig
) -> tuple[TextMetrics, TextMetrics]:
    full_text = rendered_text(document.body)
    chinese = is_chinese_page(document, full_text)
    full = count_chars_and_words(full_text, chinese)

    main_text = isolate_main(document, config.main_selectors, config.boilerplate_selectors)
    main = clamp_to_full(count_chars_and_words(main_text, chinese), full)
    return full, main


def assemble(
    url: str,
    status_code: StatusCode,
    document: Optional[PageDocument],
    config: Optional[AnalyzerConfig] = None,
    *,
    now: Optional[datetime] = None,
) -> PageReport:
    """Строит неизменяемый PageReport для документа *document*.

    Raises:
        NoTargetContext: документ не передан.
        ExtractionFailed: один из экстракторов упал непредвиденно.
    """
    if document is None:
        raise NoTargetContext(f"No document available for {url or 'the current page'}")
    cfg = config or AnalyzerConfig()
    logger.info("Analysing %s", url)

    render_type = _step("render_type", classify, document)
    metadata = _step("metadata", extract_metadata, document)
    full, main = _step("content_metrics", _content_metrics, document, cfg)
    json_ld = _step("structured_data", extract_jsonld, document, cfg.max_jsonld_depth)

    report = _step(
        "report",
        lambda: PageReport(
            url=url,
            timestamp=utc_timestamp(now),
            status_code=status_code,
            render_type=render_type,
            page_title=metadata.page_title,
            canonical=metadata.canonical,
            charset=metadata.charset,
            content_language=metadata.content_language,
            seo_metas=metadata.seo_metas,
            hreflang=metadata.hreflang,
            full_page_characters=full.chars,
            full_page_words=full.words,
            main_content_characters=main.chars,
            main_content_words=main.words,
            json_ld_list=tuple(json_ld),
        ),
    )
    logger.info(
        "Report ready: %s, %d words, %d JSON-LD blocks",
        report.render_type.value,
        report.full_page_words,
        len(report.json_ld_list),
    )
    return report
