# page_signals/__init__.py
"""
PageSignals package initializer.
Defines package version and exposes the analysis entry points.
"""
__version__ = "0.1.0"

from page_signals.assembler import assemble
from page_signals.errors import ExtractionFailed, NoTargetContext, PageSignalsError
from page_signals.models import PageReport, RenderType
from page_signals.parser.dom import PageDocument, load_document

# Expose CLI entry point
from page_signals.cli import cli as main_cli

__all__ = [
    "__version__",
    "ExtractionFailed",
    "NoTargetContext",
    "PageDocument",
    "PageReport",
    "PageSignalsError",
    "RenderType",
    "assemble",
    "load_document",
    "main_cli",
]
