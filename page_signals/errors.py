# File: page_signals/errors.py
"""page_signals.errors: Иерархия исключений анализатора страницы."""

from __future__ import annotations

__all__ = ["PageSignalsError", "NoTargetContext", "ExtractionFailed"]


class PageSignalsError(Exception):
    """Базовое исключение пакета."""


class NoTargetContext(PageSignalsError):
    """Нет документа для анализа: страница не загружена или не является HTML."""


class ExtractionFailed(PageSignalsError):
    """Непредвиденная ошибка одного из экстракторов; отчёт не строится."""

    def __init__(self, step: str, cause: BaseException) -> None:
        super().__init__(f"{step} failed: {cause.__class__.__name__}: {cause}")
        self.step = step
        self.cause = cause
