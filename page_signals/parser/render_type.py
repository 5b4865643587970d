"""CSR / SSR render-type heuristic.

A page counts as server-rendered only when its markup already carries visible
content and it does not look like an empty single-page-app shell:

* *visible content in markup*: the title is non-empty **and** the body's
  rendered text is longer than :data:`MIN_VISIBLE_BODY_CHARS` characters;
* *likely client-rendered*: a mount point (``#root``, else ``#app``) exists and
  has no child elements.

``CSR`` when likely client-rendered or no visible content, ``SSR`` otherwise.

Known limitations: the result is a guess made from a single snapshot.  Server
rendered pages that keep an empty mount node for a widget are reported as CSR,
and hydration frameworks that ship full markup are reported as SSR.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from bs4.element import Tag

from page_signals.logger import logger
from page_signals.models import RenderType
from page_signals.parser.dom import PageDocument, rendered_text

__all__: Sequence[str] = (
    "MIN_VISIBLE_BODY_CHARS",
    "MOUNT_POINT_IDS",
    "classify",
    "find_mount_point",
    "has_visible_content",
    "is_likely_client_rendered",
)

#: body text must be strictly longer than this to count as visible content
MIN_VISIBLE_BODY_CHARS: Final[int] = 50
#: ids of conventional SPA mount nodes, in lookup order
MOUNT_POINT_IDS: Final[tuple[str, ...]] = ("root", "app")


def has_visible_content(document: PageDocument) -> bool:
    body_text = rendered_text(document.body).strip()
    return bool(document.title) and len(body_text) > MIN_VISIBLE_BODY_CHARS


def find_mount_point(document: PageDocument) -> Tag | None:
    for element_id in MOUNT_POINT_IDS:
        node = document.soup.find(id=element_id)
        if node is not None:
            return node
    return None


def is_likely_client_rendered(document: PageDocument) -> bool:
    mount = find_mount_point(document)
    if mount is None:
        return False
    return mount.find(True, recursive=False) is None


def classify(document: PageDocument) -> RenderType:
    client_rendered = is_likely_client_rendered(document)
    visible = has_visible_content(document)
    render_type = RenderType.CSR if client_rendered or not visible else RenderType.SSR
    logger.debug(
        "Render type %s (empty mount point=%s, visible content=%s)",
        render_type.value,
        client_rendered,
        visible,
    )
    return render_type
