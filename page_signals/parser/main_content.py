"""Main content isolation.

Two strategies, tried in order:

1. the first selector of :data:`MAIN_SELECTORS` that matches wins and its
   rendered text is the main content;
2. otherwise the body is cloned, everything matching
   :data:`BOILERPLATE_SELECTORS` is removed from the clone and the remaining
   rendered text is used.

The live document is never modified.  A selector the CSS engine rejects is
logged and skipped; the selectors around it still apply.
"""
from __future__ import annotations

import copy
from collections.abc import Iterable, Sequence
from typing import Final

from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from page_signals.logger import logger
from page_signals.parser.dom import PageDocument, rendered_text

__all__: Sequence[str] = (
    "BOILERPLATE_SELECTORS",
    "MAIN_SELECTORS",
    "find_main_container",
    "isolate_main",
    "strip_boilerplate",
)

MAIN_SELECTORS: Final[tuple[str, ...]] = (
    "main",
    '[role="main"]',
    ".main-content",
    ".MainContent",
    "#main",
    "#content",
    ".content",
    ".post-content",
    ".entry-content",
    ".article-body",
)

BOILERPLATE_SELECTORS: Final[tuple[str, ...]] = (
    "header",
    "footer",
    "nav",
    "aside",
    '[role="banner"]',
    '[role="contentinfo"]',
    '[role="navigation"]',
    ".header",
    ".Header",
    "#header",
    ".footer",
    ".Footer",
    "#footer",
    ".site-header",
    ".site-footer",
    ".navigation",
    ".nav",
    ".sidebar",
    ".widget",
    ".ad",
    ".advertisement",
    '[class*="ad-"]',
    '[id*="ad-"]',
    ".cookie-banner",
    ".consent-banner",
)


def find_main_container(
    document: PageDocument, selectors: Iterable[str] = MAIN_SELECTORS
) -> Tag | None:
    """Return the element matched by the highest-priority selector, if any."""
    for selector in selectors:
        try:
            match = document.soup.select_one(selector)
        except SelectorSyntaxError as exc:
            logger.warning("Skipping main-content selector %r: %s", selector, exc)
            continue
        if match is not None:
            logger.debug("Main content matched by %r", selector)
            return match
    return None


def strip_boilerplate(container: Tag, selectors: Iterable[str] = BOILERPLATE_SELECTORS) -> int:
    """Detach every element matching *selectors* from *container*.

    Meant for a cloned subtree.  Returns the number of elements removed.
    """
    removed = 0
    for selector in selectors:
        try:
            matches = container.select(selector)
        except SelectorSyntaxError as exc:
            logger.warning("Skipping boilerplate selector %r: %s", selector, exc)
            continue
        for element in matches:
            if element is container:
                continue
            element.extract()
            removed += 1
    return removed


def isolate_main(
    document: PageDocument,
    main_selectors: Iterable[str] = MAIN_SELECTORS,
    boilerplate_selectors: Iterable[str] = BOILERPLATE_SELECTORS,
) -> str:
    """Rendered text of the page's primary content region."""
    container = find_main_container(document, main_selectors)
    if container is not None:
        return rendered_text(container)

    clone = copy.copy(document.body)
    removed = strip_boilerplate(clone, boilerplate_selectors)
    logger.debug("No main container, stripped %d boilerplate elements", removed)
    return rendered_text(clone)
