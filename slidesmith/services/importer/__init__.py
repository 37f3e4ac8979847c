"""Import pipeline for JSON and PowerPoint presentations."""

from .pipeline import (
    ImportPipeline,
    ImportFile,
    ImportType,
    detect_import_type,
    resolve_import_type,
    get_import_pipeline,
)
from .pptx_decoder import PptxDecoder

__all__ = [
    "ImportPipeline",
    "ImportFile",
    "ImportType",
    "detect_import_type",
    "resolve_import_type",
    "get_import_pipeline",
    "PptxDecoder",
]
