# File: page_signals/engine.py
"""page_signals.engine: Orchestration layer: загрузка страницы, статус-код и сборка отчёта."""

from __future__ import annotations

import asyncio
from typing import Optional, Union

from page_signals.assembler import assemble
from page_signals.config import AnalyzerConfig
from page_signals.fetcher import Fetcher, StatusCodeCache, open_session
from page_signals.logger import logger
from page_signals.models import NOT_AVAILABLE, PageReport, StatusCode
from page_signals.parser.dom import load_document

__all__ = ["Engine"]


class Engine:
    """Фасад для CLI и тестов: получение страницы и анализ."""

    def __init__(self, config: Optional[AnalyzerConfig] = None) -> None:
        """Инициализирует Engine; кэш статусов живёт столько же, сколько Engine."""
        self.config = config or AnalyzerConfig()
        self.status_cache = StatusCodeCache()

    async def analyze_url(self, url: str) -> PageReport:
        """Загружает *url*, берёт статус из кэша слушателя и строит отчёт."""
        async with open_session(self.config, self.status_cache) as session:
            page = await Fetcher(session, self.config).fetch(url)
        status = self.status_cache.get(page.url)
        document = load_document(page.content, page.url)
        return assemble(page.url, status, document, self.config)

    def analyze_html(
        self, html: Union[str, bytes], url: str, status_code: StatusCode = NOT_AVAILABLE
    ) -> PageReport:
        """Анализирует сохранённый снимок страницы без сетевых запросов."""
        return assemble(url, status_code, load_document(html, url), self.config)

    def run(self, url: str) -> PageReport:
        """Синхронный запуск анализа с общим таймаутом config.timeout."""
        logger.info("Starting analysis of %s", url)
        try:
            return asyncio.run(asyncio.wait_for(self.analyze_url(url), timeout=self.config.timeout))
        except asyncio.TimeoutError:
            logger.error("Analysis did not finish within %s seconds", self.config.timeout)
            raise
        except Exception as exc:
            logger.error("Analysis failed: %s", exc)
            raise
