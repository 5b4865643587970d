# File: tests/test_engine.py
# Fetcher, status listener and engine against a local aiohttp server
from __future__ import annotations

import asyncio
import threading
from collections.abc import AsyncIterator, Iterator

import pytest
import pytest_asyncio
from aiohttp import web

from page_signals.config import AnalyzerConfig
from page_signals.engine import Engine
from page_signals.errors import NoTargetContext
from page_signals.fetcher import Fetcher, StatusCodeCache, open_session
from page_signals.models import RenderType

ARTICLE = """<!DOCTYPE html>
<html lang="en"><head><title>Served article</title>
<link rel="canonical" href="/article">
<script type="application/ld+json">{"@type": "NewsArticle"}</script>
</head><body><nav>Home</nav><main><p>This article is rendered on the server and
has plenty of words in its markup for the heuristic.</p></main></body></html>"""


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


def _build_app() -> web.Application:
    app = web.Application()

    async def handle_article(request):
        assert request.headers["User-Agent"] == "TestAgent/1.0"
        return web.Response(text=ARTICLE, content_type="text/html")

    async def handle_missing(_):
        return web.Response(
            status=404,
            text="<html><head><title>Not found</title></head><body><p>Gone</p></body></html>",
            content_type="text/html",
        )

    async def handle_redirect(_):
        raise web.HTTPFound("/article")

    async def handle_image(_):
        return web.Response(body=b"\x89PNG", content_type="image/png")

    async def handle_slow(_):
        await asyncio.sleep(3)
        return web.Response(text=ARTICLE, content_type="text/html")

    app.router.add_get("/article", handle_article)
    app.router.add_get("/missing", handle_missing)
    app.router.add_get("/old", handle_redirect)
    app.router.add_get("/logo.png", handle_image)
    app.router.add_get("/slow", handle_slow)
    return app


@pytest_asyncio.fixture
async def test_server(unused_tcp_port: int) -> AsyncIterator[str]:
    async for url in _serve_app(_build_app(), unused_tcp_port):
        yield url


@pytest.fixture
def threaded_server(unused_tcp_port: int) -> Iterator[str]:
    """Server on its own loop in a thread, for the blocking Engine.run."""
    loop = asyncio.new_event_loop()
    runner = web.AppRunner(_build_app())
    loop.run_until_complete(runner.setup())
    loop.run_until_complete(web.TCPSite(runner, "localhost", unused_tcp_port).start())
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()
    try:
        yield f"http://localhost:{unused_tcp_port}"
    finally:
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.run_until_complete(runner.cleanup())
        loop.close()


@pytest.mark.asyncio()
async def test_analyze_served_page(basic_config, test_server):
    report = await Engine(basic_config).analyze_url(f"{test_server}/article")

    assert report.url == f"{test_server}/article"
    assert report.status_code == 200
    assert report.render_type is RenderType.SSR
    assert report.canonical == f"{test_server}/article"
    assert report.json_ld_list[0].types == ("NewsArticle",)
    assert report.main_content_words < report.full_page_words


@pytest.mark.asyncio()
async def test_error_status_is_reported_not_raised(basic_config, test_server):
    report = await Engine(basic_config).analyze_url(f"{test_server}/missing")
    assert report.status_code == 404
    assert report.page_title == "Not found"


@pytest.mark.asyncio()
async def test_redirect_reports_final_url(basic_config, test_server):
    engine = Engine(basic_config)
    report = await engine.analyze_url(f"{test_server}/old")

    assert report.url == f"{test_server}/article"
    assert report.status_code == 200
    assert engine.status_cache.get(f"{test_server}/old") == 302


@pytest.mark.asyncio()
async def test_non_html_is_no_target(basic_config, test_server):
    with pytest.raises(NoTargetContext):
        await Engine(basic_config).analyze_url(f"{test_server}/logo.png")


@pytest.mark.asyncio()
async def test_connection_refused_is_no_target(basic_config, unused_tcp_port):
    cache = StatusCodeCache()
    async with open_session(basic_config, cache) as session:
        with pytest.raises(NoTargetContext):
            await Fetcher(session, basic_config).fetch(f"http://localhost:{unused_tcp_port}/")
    assert cache.get(f"http://localhost:{unused_tcp_port}/") == "N/A"


@pytest.mark.asyncio()
async def test_fetch_timeout_is_no_target(test_server):
    config = AnalyzerConfig(timeout=0.5, user_agent="TestAgent/1.0")
    with pytest.raises(NoTargetContext):
        await Engine(config).analyze_url(f"{test_server}/slow")


def test_status_cache_defaults():
    cache = StatusCodeCache()
    assert cache.get("https://example.com/") == "N/A"
    cache.record("https://example.com/", 503)
    assert cache.get("https://example.com/") == 503


def test_analyze_html_without_network(rich_html):
    report = Engine().analyze_html(rich_html, "https://example.com/blog/post")
    assert report.status_code == "N/A"
    assert report.page_title == "Structured data in practice"


def test_run_returns_report(basic_config, threaded_server):
    report = Engine(basic_config).run(f"{threaded_server}/article")
    assert report.status_code == 200
    assert report.render_type is RenderType.SSR
    assert report.page_title == "Served article"


def test_run_is_bounded_by_timeout(threaded_server):
    config = AnalyzerConfig(timeout=0.5, user_agent="TestAgent/1.0")
    with pytest.raises(asyncio.TimeoutError):
        Engine(config).run(f"{threaded_server}/slow")
