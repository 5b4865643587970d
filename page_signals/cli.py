# === FILE: page_signals/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска анализатора PageSignals через командную строку.

Команды:
  analyze URL        Загрузить страницу, проанализировать и вывести/сохранить отчёт
  analyze-file PATH  Проанализировать сохранённый HTML-снимок страницы
  config             Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования (e.g. "%(asctime)s %(levelname)s %(message)s")

Опции отчёта:
  --json PATH         Сохранить JSON-отчёт в файл
  --csv PATH          Сохранить CSV-отчёт в файл
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблонами (по умолчанию встроенный шаблон)
  --jsonld-dir DIR    Сохранить каждый блок JSON-LD в отдельный файл
  --pretty            Преформатировать JSON-вывод (отступ 2)

Дополнительно:
  --version, -v       Показать версию PageSignals

Пример:
  page-signals analyze https://example.com --json report.json --csv report.csv
"""
import asyncio
import sys
from pathlib import Path
from typing import Optional

import click

from page_signals import __version__
from page_signals.config import load_config
from page_signals.engine import Engine
from page_signals.errors import PageSignalsError
from page_signals.logger import DEFAULT_FORMAT, init_logging
from page_signals.models import NOT_AVAILABLE, PageReport
from page_signals.report.csv_report import render_csv
from page_signals.report.html_report import render_html
from page_signals.report.json_report import dumps_report, render_json
from page_signals.report.jsonld_export import export_jsonld

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _parse_status(ctx, param, value):
    if value is None or value.upper() == NOT_AVAILABLE:
        return NOT_AVAILABLE
    try:
        return int(value)
    except ValueError:
        raise click.BadParameter('ожидается целое число или N/A')


def report_options(func):
    """Общие опции вывода отчёта для команд analyze и analyze-file."""
    options = [
        click.option('--json', '-j', 'json_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить JSON-отчёт в файл'),
        click.option('--csv', 'csv_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить CSV-отчёт в файл'),
        click.option('--html', '-h', 'html_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить HTML-отчёт в файл'),
        click.option('--template', '-t', 'template_dir', default=None,
                     type=click.Path(exists=True, file_okay=False, path_type=Path),
                     help='Папка с Jinja2-шаблонами'),
        click.option('--jsonld-dir', 'jsonld_dir', default=None,
                     type=click.Path(file_okay=False, path_type=Path),
                     help='Сохранить блоки JSON-LD в отдельные файлы'),
        click.option('--pretty', is_flag=True,
                     help='Преформатировать JSON-вывод (отступ 2)'),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PageSignals, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд PageSignals CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


def emit_report(
    report: PageReport,
    json_output: Optional[Path],
    csv_output: Optional[Path],
    html_output: Optional[Path],
    template_dir: Optional[Path],
    jsonld_dir: Optional[Path],
    pretty: bool,
) -> None:
    """Печатает отчёт в stdout или сохраняет запрошенные файлы."""
    if not any((json_output, csv_output, html_output, jsonld_dir)):
        click.echo(dumps_report(report, pretty=pretty))
        return

    if json_output:
        try:
            saved_json = render_json(report, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if csv_output:
        try:
            saved_csv = render_csv(report, csv_output)
            click.echo(f'CSV report: {saved_csv}')
        except OSError as e:
            print_error(f'Ошибка при сохранении CSV: {e}')

    if html_output:
        try:
            saved_html = render_html(report, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')

    if jsonld_dir:
        try:
            saved = export_jsonld(report, jsonld_dir)
        except OSError as e:
            print_error(f'Ошибка при экспорте JSON-LD: {e}')
        if not saved:
            click.echo('No structured data found')
        for path in saved:
            click.echo(f'JSON-LD: {path}')


@cli.command('analyze', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@report_options
@click.option(
    '--timeout', 'timeout',
    type=float,
    default=None,
    help='Таймаут всего анализа (секунд), override config.timeout'
)
@click.pass_context
def analyze(ctx, url, json_output, csv_output, html_output, template_dir, jsonld_dir, pretty, timeout):
    """Загрузить страницу URL и построить отчёт."""
    cfg = ctx.obj['config']
    if timeout is not None:
        if timeout <= 0:
            print_error('Таймаут должен быть положительным')
        cfg = cfg.model_copy(update={'timeout': timeout})
    try:
        report = Engine(cfg).run(url)
    except asyncio.TimeoutError:
        print_error(f'Анализ не завершён за {cfg.timeout} секунд')
    except PageSignalsError as e:
        print_error(f'Ошибка при анализе: {e}')

    emit_report(report, json_output, csv_output, html_output, template_dir, jsonld_dir, pretty)


@cli.command('analyze-file', context_settings=CONTEXT_SETTINGS)
@click.argument('path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--url', 'url', required=True, help='Адрес страницы, с которой снят снимок')
@click.option('--status', 'status_code', default=None, callback=_parse_status,
              help='HTTP-статус страницы (число или N/A)')
@report_options
@click.pass_context
def analyze_file(ctx, path, url, status_code, json_output, csv_output, html_output,
                 template_dir, jsonld_dir, pretty):
    """Проанализировать сохранённый HTML-файл."""
    engine = Engine(ctx.obj['config'])
    try:
        report = engine.analyze_html(path.read_bytes(), url, status_code)
    except PageSignalsError as e:
        print_error(f'Ошибка при анализе: {e}')

    emit_report(report, json_output, csv_output, html_output, template_dir, jsonld_dir, pretty)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
