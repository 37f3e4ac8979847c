"""API routes for Slidesmith."""

from .routes import editing, sessions, validation

__all__ = [
    "editing",
    "sessions",
    "validation",
]
