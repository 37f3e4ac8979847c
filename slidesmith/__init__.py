"""
Slidesmith - Presentation Editing Core

Document model, undo/redo history, debounced autosave and a validating
import pipeline for JSON and PowerPoint slide decks.
"""

__version__ = "1.0.0"
__author__ = "Slidesmith Team"
