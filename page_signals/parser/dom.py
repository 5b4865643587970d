"""DOM snapshot helpers for PageSignals.

Every extractor works against a :class:`PageDocument` – an immutable pairing of
a parsed BeautifulSoup tree and the URL it was loaded from.  Passing the
snapshot explicitly keeps the extractors pure: the same markup always yields
the same signals, and tests can build synthetic trees without a browser.

:func:`rendered_text` is the browser-free stand-in for ``innerText``.  It is an
approximation:

* text inside non-rendered elements (``script``, ``style``, ``template``,
  ``head`` …), comments, ``hidden`` elements and inline ``display: none``
  elements is skipped;
* runs of ASCII whitespace collapse to a single space;
* block elements and ``<br>`` start new lines, lines are trimmed and empty
  lines dropped.

No CSS is evaluated, so stylesheet-hidden content still counts.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

__all__: Sequence[str] = ("PageDocument", "load_document", "rendered_text")

_PARSER: Final[str] = "html.parser"

_SKIP_TAGS: Final[frozenset[str]] = frozenset(
    {"script", "style", "noscript", "template", "head", "title", "meta", "link", "iframe", "object"}
)
_BLOCK_TAGS: Final[frozenset[str]] = frozenset(
    {
        "address", "article", "aside", "blockquote", "body", "caption", "dd", "details",
        "dialog", "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
        "h1", "h2", "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "html", "legend", "li",
        "main", "nav", "ol", "p", "pre", "section", "summary", "table", "tbody", "tfoot",
        "thead", "tr", "ul",
    }
)
_CELL_TAGS: Final[frozenset[str]] = frozenset({"td", "th"})

_ASCII_WS_RE = re.compile(r"[ \t\n\r\f]+")
_INLINE_WS_RE = re.compile(r"[ \t\r\f]+")
_DISPLAY_NONE_RE = re.compile(r"display\s*:\s*none", re.IGNORECASE)

# stack markers
_LINE_BREAK: Final[str] = "\n"
_CELL_BREAK: Final[str] = " "


@dataclass(frozen=True, slots=True)
class PageDocument:
    """One parsed page: the soup plus the URL used to resolve relative links."""

    soup: BeautifulSoup
    url: str = ""

    @property
    def root(self) -> Tag | None:
        return self.soup.find("html")

    @property
    def body(self) -> Tag:
        """``<body>``, or the whole tree when the markup never declares one."""
        body = self.soup.find("body")
        return self.soup if body is None else body

    @property
    def lang(self) -> str:
        root = self.root
        if root is None:
            return ""
        return str(root.get("lang") or "").strip()

    @property
    def title(self) -> str:
        tag = self.soup.find("title")
        if tag is None:
            return ""
        return " ".join(_ASCII_WS_RE.split(tag.get_text())).strip()

    @property
    def base_url(self) -> str:
        base = self.soup.find("base", href=True)
        if base is not None:
            return urljoin(self.url, str(base["href"]).strip())
        return self.url

    def http_equiv(self, name: str) -> Tag | None:
        """First ``<meta http-equiv=name>``; the attribute value is case-insensitive."""
        wanted = name.lower()
        for meta in self.soup.find_all("meta", attrs={"http-equiv": True}):
            if str(meta["http-equiv"]).strip().lower() == wanted:
                return meta
        return None

    def resolve(self, href: str) -> str:
        """Absolute URL for *href*, the way ``element.href`` reports it."""
        return urljoin(self.base_url, href.strip())


def load_document(html: str | bytes, url: str = "") -> PageDocument:
    """Parse *html* into a :class:`PageDocument` anchored at *url*."""
    return PageDocument(soup=BeautifulSoup(html, _PARSER), url=url)


def _is_hidden(tag: Tag) -> bool:
    if tag.has_attr("hidden"):
        return True
    style = tag.get("style")
    return bool(style) and _DISPLAY_NONE_RE.search(str(style)) is not None


def rendered_text(node: PageElement | None) -> str:
    """Approximate ``innerText`` of *node*.

    The tree is walked with an explicit stack, so arbitrarily deep markup does
    not hit the recursion limit.
    """
    if node is None:
        return ""

    chunks: list[str] = []
    stack: list[PageElement | str] = [node]
    while stack:
        item = stack.pop()
        if item is _LINE_BREAK or item is _CELL_BREAK:
            chunks.append(item)  # type: ignore[arg-type]
            continue
        if isinstance(item, PreformattedString):
            # comments, CDATA, doctype, processing instructions
            continue
        if isinstance(item, NavigableString):
            chunks.append(_ASCII_WS_RE.sub(" ", str(item)))
            continue
        if not isinstance(item, Tag):
            continue

        name = (item.name or "").lower()
        if name in _SKIP_TAGS or _is_hidden(item):
            continue
        if name == "br":
            chunks.append(_LINE_BREAK)
            continue

        if name in _BLOCK_TAGS:
            stack.append(_LINE_BREAK)
        elif name in _CELL_TAGS:
            stack.append(_CELL_BREAK)
        stack.extend(reversed(item.contents))
        if name in _BLOCK_TAGS:
            stack.append(_LINE_BREAK)

    lines = (_INLINE_WS_RE.sub(" ", line).strip() for line in "".join(chunks).split("\n"))
    return "\n".join(line for line in lines if line)
