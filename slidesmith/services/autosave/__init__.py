"""Debounced autosave over editing history."""

from .coordinator import AutosaveCoordinator, DEFAULT_DEBOUNCE_SECONDS
from .models import AutosaveStatus, describe_last_saved
from .persistence import Persister, FilePersister

__all__ = [
    "AutosaveCoordinator",
    "DEFAULT_DEBOUNCE_SECONDS",
    "AutosaveStatus",
    "describe_last_saved",
    "Persister",
    "FilePersister",
]
