"""Presentation schema validation."""

from .validator import validate_presentation, parse_presentation

__all__ = [
    "validate_presentation",
    "parse_presentation",
]
