# page_signals/report/jsonld_export.py

"""
Экспорт каждого блока JSON-LD в отдельный файл ``schema-<n>-<тип>.json``.

Битые блоки сохраняются как ``{"error": "Invalid JSON", "raw": ...}``.
"""
import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from page_signals.logger import logger
from page_signals.models import PageReport, utc_timestamp
from page_signals.parser.structured_data import INVALID_JSON_TYPE, parse_jsonld

EXPORTED_BY = "PageSignals"
_UNSAFE_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def export_filename(index: int, types: tuple[str, ...]) -> str:
    """Имя файла для блока с порядковым номером index (с 1)."""
    safe_type = _UNSAFE_RE.sub("_", types[0] if types else "unknown")
    return f"schema-{index}-{safe_type}.json"


def _export_object(raw: str, types: tuple[str, ...]) -> Any:
    if INVALID_JSON_TYPE in types:
        return {"error": INVALID_JSON_TYPE, "raw": raw}
    return parse_jsonld(raw)


def export_jsonld(
    report: PageReport, output_dir: Path | str, *, now: Optional[datetime] = None
) -> List[Path]:
    """
    Сохраняет все блоки JSON-LD отчёта в output_dir и возвращает пути файлов.
    Пустой список, если на странице нет структурированных данных.
    """
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    meta = {"exportedBy": EXPORTED_BY, "timestamp": utc_timestamp(now)}

    saved: List[Path] = []
    for index, entry in enumerate(report.json_ld_list, start=1):
        obj = _export_object(entry.raw, entry.types)
        if isinstance(obj, dict):
            obj = {**obj, "_meta": meta}
        else:
            obj = {"data": obj, "_meta": meta}
        path = out / export_filename(index, entry.types)
        path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.debug("Exported JSON-LD block %d to %s", index, path)
        saved.append(path)
    return saved
