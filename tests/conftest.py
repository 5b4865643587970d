# File: tests/conftest.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from page_signals.config import AnalyzerConfig
from page_signals.parser.dom import PageDocument, load_document

PAGE_URL = "https://example.com/blog/post"


def page(body: str, *, head: str = "<title>Test page</title>", html_attrs: str = 'lang="en"') -> str:
    """Build a full HTML document from head and body fragments."""
    return f"<!DOCTYPE html><html {html_attrs}><head>{head}</head><body>{body}</body></html>"


@pytest.fixture()
def make_document() -> Callable[..., PageDocument]:
    """
    Factory: make_document(body, head=..., html_attrs=..., url=...) -> PageDocument.
    """

    def _make(body: str = "", *, url: str = PAGE_URL, **kwargs) -> PageDocument:
        return load_document(page(body, **kwargs), url)

    return _make


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def basic_config() -> AnalyzerConfig:
    """Return a valid AnalyzerConfig with a short timeout."""
    return AnalyzerConfig(timeout=5.0, user_agent="TestAgent/1.0")


@pytest.fixture()
def rich_html() -> str:
    """A server-rendered article page exercising every extractor."""
    return page(
        body="""
        <header><nav><a href="/">Home</a> <a href="/blog">Blog</a></nav></header>
        <main>
          <h1>Structured data in practice</h1>
          <p>Search engines read embedded JSON-LD to understand what a page is about.</p>
        </main>
        <footer>Copyright Example Inc.</footer>
        <script type="application/ld+json">
          {"@context": "https://schema.org", "@type": "Article",
           "author": {"@type": "Person", "name": "Jane"}}
        </script>
        <script type="application/ld+json">not valid json</script>
        """,
        head="""
        <meta charset="utf-8">
        <title>Structured data in practice</title>
        <meta name="description" content="How JSON-LD works">
        <meta name="viewport" content="width=device-width">
        <meta property="og:title" content="Structured data">
        <meta name="twitter:card" content="summary">
        <link rel="canonical" href="/blog/post">
        <link rel="alternate" hreflang="en" href="https://example.com/en/post">
        <link rel="alternate" hreflang="fr" href="https://example.com/fr/post">
        """,
    )


@pytest.fixture()
def page_html() -> Callable[..., str]:
    """Factory returning raw markup, for tests that parse it themselves."""
    return page
