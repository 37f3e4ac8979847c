"""Service layer for Slidesmith."""

from .validation import validate_presentation, parse_presentation
from .history import HistoryManager, HistoryState, Transition
from .autosave import AutosaveCoordinator, AutosaveStatus, FilePersister
from .importer import ImportPipeline, ImportFile, ImportType, get_import_pipeline
from .exporter import PptxExporter, export_json, export_pptx, export_filename
from .editor import EditorService, EditorSession, get_editor_service

__all__ = [
    "validate_presentation",
    "parse_presentation",
    "HistoryManager",
    "HistoryState",
    "Transition",
    "AutosaveCoordinator",
    "AutosaveStatus",
    "FilePersister",
    "ImportPipeline",
    "ImportFile",
    "ImportType",
    "get_import_pipeline",
    "PptxExporter",
    "export_json",
    "export_pptx",
    "export_filename",
    "EditorService",
    "EditorSession",
    "get_editor_service",
]
