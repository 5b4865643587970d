# page_signals/fetcher.py
"""
Fetcher module: loads the one page to analyse and records HTTP status codes.

Status codes are not taken from the fetch result.  A :class:`StatusCodeCache`
is attached to the session as an aiohttp trace listener and notes the status
of every request that completes, the same way a browser extension listens for
completed navigations.  The engine then looks the page URL up in that cache.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Dict, Final, Union

from aiohttp import (
    ClientError,
    ClientSession,
    ClientTimeout,
    TraceConfig,
    TraceRequestEndParams,
    TraceRequestRedirectParams,
)

from page_signals.config import AnalyzerConfig
from page_signals.errors import NoTargetContext
from page_signals.logger import logger
from page_signals.models import NOT_AVAILABLE, StatusCode

__all__ = ("PageData", "StatusCodeCache", "Fetcher", "open_session")

_TEXT_TYPES: Final[tuple[str, ...]] = ("html", "xml", "text/")


@dataclass(slots=True)
class PageData:
    """Final URL, decoded markup and Content-Type of a fetched page."""

    url: str
    content: str
    content_type: str = ""


class StatusCodeCache:
    """Last observed HTTP status per URL, for the lifetime of one session."""

    def __init__(self) -> None:
        self._statuses: Dict[str, int] = {}

    def record(self, url: str, status: int) -> None:
        logger.debug("Observed %s -> %s", url, status)
        self._statuses[url] = status

    def get(self, url: str) -> StatusCode:
        return self._statuses.get(url, NOT_AVAILABLE)

    def trace_config(self) -> TraceConfig:
        trace = TraceConfig()
        trace.on_request_end.append(self._on_response)
        trace.on_request_redirect.append(self._on_response)
        return trace

    async def _on_response(
        self,
        session: ClientSession,
        context: SimpleNamespace,
        params: Union[TraceRequestEndParams, TraceRequestRedirectParams],
    ) -> None:
        self.record(str(params.response.url), params.response.status)


def open_session(config: AnalyzerConfig, status_cache: StatusCodeCache) -> ClientSession:
    """Client session with the configured user agent, timeout and status listener."""
    return ClientSession(
        headers={"User-Agent": config.user_agent},
        timeout=ClientTimeout(total=config.timeout),
        trace_configs=[status_cache.trace_config()],
    )


class Fetcher:
    """Loads a single page; anything that leaves no document raises NoTargetContext."""

    def __init__(self, session: ClientSession, config: AnalyzerConfig) -> None:
        self.session = session
        self.config = config

    async def fetch(self, url: str) -> PageData:
        try:
            async with self.session.get(url, raise_for_status=False, allow_redirects=True) as resp:
                ctype = resp.headers.get("Content-Type", "").lower()
                if ctype and not any(kind in ctype for kind in _TEXT_TYPES):
                    raise NoTargetContext(f"{resp.url} is not an HTML page ({ctype})")
                text = await resp.text(errors="replace")
                return PageData(str(resp.url), text, ctype)
        except asyncio.TimeoutError as exc:
            logger.warning("Timed out fetching %s", url)
            raise NoTargetContext(f"Timed out fetching {url}") from exc
        except ClientError as exc:
            logger.warning("Failed to fetch %s: %s", url, exc)
            raise NoTargetContext(f"Failed to fetch {url}: {exc}") from exc
