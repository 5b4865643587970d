"""page_signals.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from page_signals.models import PageReport
from page_signals.parser.structured_data import INVALID_JSON_TYPE

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "report.html.j2"


def _pretty_jsonld(raw: str, types: list[str]) -> str:
    if INVALID_JSON_TYPE in types:
        return raw
    try:
        return json.dumps(json.loads(raw), ensure_ascii=False, indent=2)
    except ValueError:
        return raw


def build_context(report: PageReport) -> dict[str, Any]:
    """Данные для шаблона: поля отчёта и отформатированные блоки JSON-LD."""
    data = report.to_dict()
    blocks = [
        {"types": item["types"], "raw": item["raw"], "pretty": _pretty_jsonld(item["raw"], item["types"])}
        for item in data["jsonLdList"]
    ]
    hreflang = [tuple(entry.split(":", 1)) for entry in data["hreflang"] if ":" in entry]
    return {
        "report": data,
        "meta_groups": [
            ("General", data["seoMetas"]["general"]),
            ("Open Graph", data["seoMetas"]["openGraph"]),
            ("Twitter Card", data["seoMetas"]["twitterCard"]),
        ],
        "hreflang": hreflang,
        "jsonld_blocks": blocks,
    }


def render_html(
    report: PageReport,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт из шаблона и сохраняет его по указанному пути.

    Args:
        report: объект PageReport.
        template_dir: директория с Jinja2-шаблонами (None: встроенный шаблон).
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template(TEMPLATE_NAME)

    html_content = template.render(**build_context(report))
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
