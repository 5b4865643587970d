# page_signals/report/csv_report.py

"""
Генерация CSV-отчёта: одна строка заголовков и одна строка значений.

Вложенные словари разворачиваются в ключи вида ``seoMetas_general_description``,
списки склеиваются через ``"; "``, а для jsonLdList берутся только типы блоков.
"""
import csv
import io
from pathlib import Path
from typing import Any

from page_signals.models import PageReport

LIST_SEPARATOR = "; "
TYPE_SEPARATOR = ", "


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = prefix + key
        if isinstance(value, dict):
            flat.update(_flatten(value, name + "_"))
        elif isinstance(value, list):
            if key == "jsonLdList":
                flat[name] = LIST_SEPARATOR.join(TYPE_SEPARATOR.join(item["types"]) for item in value)
            else:
                flat[name] = LIST_SEPARATOR.join(str(item) for item in value)
        else:
            flat[name] = value
    return flat


def flatten_report(report: PageReport) -> dict[str, Any]:
    """Плоский словарь отчёта в порядке полей PageReport."""
    return _flatten(report.to_dict())


def dumps_csv(report: PageReport) -> str:
    flat = flatten_report(report)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(flat.keys())
    writer.writerow("" if value is None else value for value in flat.values())
    return buffer.getvalue()


def render_csv(report: PageReport, output_path: Path | str) -> Path:
    """Сохраняет CSV-отчёт по указанному пути и возвращает Path файла."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dumps_csv(report), encoding="utf-8")
    return output
