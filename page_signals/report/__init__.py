# File: page_signals/report/__init__.py
"""page_signals.report: Экспорт PageReport в JSON, CSV, HTML и файлы JSON-LD."""

from __future__ import annotations

from page_signals.report.csv_report import flatten_report, render_csv
from page_signals.report.html_report import render_html
from page_signals.report.json_report import dumps_report, render_json
from page_signals.report.jsonld_export import export_jsonld

__all__ = [
    "dumps_report",
    "export_jsonld",
    "flatten_report",
    "render_csv",
    "render_html",
    "render_json",
]
