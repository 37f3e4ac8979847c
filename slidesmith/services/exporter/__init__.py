"""Export presentations to JSON and PowerPoint."""

from .json_exporter import export_filename, export_json
from .pptx_exporter import PptxExporter, export_pptx, parse_font_size

__all__ = [
    "export_filename",
    "export_json",
    "PptxExporter",
    "export_pptx",
    "parse_font_size",
]
