# page_signals/report/json_report.py

"""
Генерация JSON-отчёта для проекта PageSignals.

Сериализация объекта PageReport в строку или файл.
"""
import json
from pathlib import Path
from typing import Any

from page_signals import __version__
from page_signals.models import PageReport

TOOL_NAME = "PageSignals"


def report_payload(report: PageReport) -> dict[str, Any]:
    """Словарь отчёта с полями обмена и блоком _meta."""
    data = report.to_dict()
    data["_meta"] = {"tool": TOOL_NAME, "version": __version__}
    return data


def dumps_report(report: PageReport, *, pretty: bool = True) -> str:
    """Возвращает JSON-представление отчёта."""
    return json.dumps(report_payload(report), ensure_ascii=False, indent=2 if pretty else None)


def render_json(report: PageReport, output_path: Path | str, *, pretty: bool = True) -> Path:
    """
    Сохраняет отчёт report в формате JSON по указанному пути.

    :param report: объект PageReport
    :param output_path: путь к JSON-файлу
    :param pretty: отступ 2 пробела
    :return: Path сохранённого файла

    Пример:
    ```python
    from page_signals.report.json_report import render_json
    report_path = render_json(report, 'reports/seo-report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(dumps_report(report, pretty=pretty), encoding="utf-8")
    return output
