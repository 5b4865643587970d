"""JSON-LD structured data extraction.

Every ``<script type="application/ld+json">`` block becomes one
:class:`~page_signals.models.JsonLdEntry`, in document order:

* blank blocks are skipped;
* parsable blocks report every ``@type`` declared anywhere inside them;
* a block without any ``@type`` is tagged :data:`UNKNOWN_TYPE`;
* a block that does not parse is kept verbatim and tagged
  :data:`INVALID_JSON_TYPE` – broken markup is a finding, not an error.
"""
from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any, Dict, Final, Iterator, List, Union

from bs4.element import NavigableString, Tag

from page_signals.logger import logger
from page_signals.models import JsonLdEntry
from page_signals.parser.dom import PageDocument

__all__: Sequence[str] = (
    "DEFAULT_MAX_DEPTH",
    "INVALID_JSON_TYPE",
    "UNKNOWN_TYPE",
    "collect_types",
    "extract_jsonld",
    "parse_jsonld",
)

JSONLD_MIME: Final[str] = "application/ld+json"
UNKNOWN_TYPE: Final[str] = "Unknown"
INVALID_JSON_TYPE: Final[str] = "Invalid JSON"
DEFAULT_MAX_DEPTH: Final[int] = 10_000
_TYPE_KEY: Final[str] = "@type"

JsonValue = Union[None, bool, int, float, str, List["JsonValue"], Dict[str, "JsonValue"]]


def _reject_constant(name: str) -> Any:
    # JSON.parse does not accept NaN / Infinity
    raise ValueError(f"Non-standard JSON constant {name}")


def parse_jsonld(text: str) -> JsonValue:
    """Strict JSON parsing; raises :class:`ValueError` on anything invalid."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise ValueError("JSON nesting too deep to parse") from exc


def _declared_types(value: JsonValue) -> Iterator[str]:
    if isinstance(value, str):
        if value:
            yield value
    elif isinstance(value, list):
        for item in value:
            if isinstance(item, str) and item:
                yield item


def collect_types(value: JsonValue, max_depth: int = DEFAULT_MAX_DEPTH) -> list[str]:
    """All ``@type`` names found in *value*, deduplicated, in first-seen order.

    Walks objects and arrays depth-first with an explicit stack.  Containers
    nested deeper than *max_depth* are not descended into, so a block whose
    only ``@type`` sits below a configured limit falls back to
    :data:`UNKNOWN_TYPE`.  The default is above what :func:`json.loads` can
    parse, so only a lowered limit ever cuts a block short.
    """
    found: dict[str, None] = {}
    truncated = False
    stack: list[tuple[JsonValue, int]] = [(value, 0)]
    while stack:
        node, depth = stack.pop()
        if depth > max_depth:
            truncated = True
            continue
        if isinstance(node, list):
            stack.extend((item, depth + 1) for item in reversed(node))
        elif isinstance(node, dict):
            for name in _declared_types(node.get(_TYPE_KEY)):
                found.setdefault(name, None)
            children = [
                (child, depth + 1)
                for key, child in node.items()
                if key != _TYPE_KEY and isinstance(child, (dict, list))
            ]
            stack.extend(reversed(children))
    if truncated:
        logger.warning("JSON-LD nested deeper than %d levels, inner types ignored", max_depth)
    return list(found)


def _script_text(script: Tag) -> str:
    return "".join(str(s) for s in script.contents if isinstance(s, NavigableString))


def _is_jsonld(script: Tag) -> bool:
    return str(script.get("type") or "").strip().lower() == JSONLD_MIME


def extract_jsonld(document: PageDocument, max_depth: int = DEFAULT_MAX_DEPTH) -> list[JsonLdEntry]:
    entries: list[JsonLdEntry] = []
    for script in document.soup.find_all("script"):
        if not _is_jsonld(script):
            continue
        raw = _script_text(script).strip()
        if not raw:
            continue
        try:
            data = parse_jsonld(raw)
        except ValueError as exc:
            logger.debug("Invalid JSON-LD block #%d: %s", len(entries) + 1, exc)
            entries.append(JsonLdEntry(raw=raw, types=(INVALID_JSON_TYPE,)))
            continue
        types = collect_types(data, max_depth) or [UNKNOWN_TYPE]
        entries.append(JsonLdEntry(raw=raw, types=tuple(types)))
    logger.debug("Found %d JSON-LD blocks", len(entries))
    return entries
