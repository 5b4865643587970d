# File: page_signals/parser/__init__.py
"""page_signals.parser: Экстракторы сигналов страницы, работающие с одним снимком DOM."""

from page_signals.parser.dom import PageDocument, load_document, rendered_text

__all__ = ["PageDocument", "load_document", "rendered_text"]
