"""Undo/redo history for editing sessions."""

from .manager import HistoryManager, HistoryState, HistoryListener, Transition

__all__ = [
    "HistoryManager",
    "HistoryState",
    "HistoryListener",
    "Transition",
]
