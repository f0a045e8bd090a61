"""Export-Modul: Text, Excel (openpyxl) und PDF (fpdf2) für den Meeting-Plan."""

from export.text_export import TextExporter, render_text
from export.excel_export import ExcelExporter
from export.pdf_export import PdfExporter

__all__ = ["TextExporter", "render_text", "ExcelExporter", "PdfExporter"]
