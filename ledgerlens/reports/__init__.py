"""Statement row model, renderers and export for LedgerLens."""

from ledgerlens.reports.export import FILE_RENDERERS, export_statement, get_renderer
from ledgerlens.reports.json_payload import JsonRenderer
from ledgerlens.reports.pdf import PdfRenderer
from ledgerlens.reports.rows import ExportFormatter, export_filename
from ledgerlens.reports.screen import ScreenRenderer
from ledgerlens.reports.spreadsheet import SpreadsheetRenderer
from ledgerlens.reports.text import TextRenderer

__all__ = [
    "ExportFormatter",
    "FILE_RENDERERS",
    "JsonRenderer",
    "PdfRenderer",
    "ScreenRenderer",
    "SpreadsheetRenderer",
    "TextRenderer",
    "export_filename",
    "export_statement",
    "get_renderer",
]
