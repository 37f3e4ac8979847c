"""Editing sessions and document operations."""

from .service import EditorService, get_editor_service
from .session import EditorSession, default_document
from . import operations

__all__ = [
    "EditorService",
    "get_editor_service",
    "EditorSession",
    "default_document",
    "operations",
]
