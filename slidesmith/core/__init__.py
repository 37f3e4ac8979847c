"""Core configuration module for Slidesmith."""

from .debug import (
    init_debug_mode,
    is_debug_mode,
    get_debug_status,
    increment_save_count,
    get_save_count,
    reset_save_count,
)
from .config import Settings, get_settings
from .logging import setup_logging
from .errors import (
    SlidesmithError,
    ImportErrorKind,
    DocumentImportError,
    SchemaViolationError,
    PersistenceError,
    DocumentOperationError,
    SessionNotFoundError,
)

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "init_debug_mode",
    "is_debug_mode",
    "get_debug_status",
    "increment_save_count",
    "get_save_count",
    "reset_save_count",
    "SlidesmithError",
    "ImportErrorKind",
    "DocumentImportError",
    "SchemaViolationError",
    "PersistenceError",
    "DocumentOperationError",
    "SessionNotFoundError",
]
