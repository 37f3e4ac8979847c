"""Pydantic models for Slidesmith."""

from .presentation import (
    ELEMENT_TYPES,
    LIST_ELEMENT_TYPES,
    TEXT_ELEMENT_TYPES,
    Element,
    ElementId,
    HeadingElement,
    ParagraphElement,
    BulletListElement,
    NumberedListElement,
    ImageElement,
    Slide,
    PresentationDocument,
    ValidationResult,
    documents_equal,
)

__all__ = [
    "ELEMENT_TYPES",
    "LIST_ELEMENT_TYPES",
    "TEXT_ELEMENT_TYPES",
    "Element",
    "ElementId",
    "HeadingElement",
    "ParagraphElement",
    "BulletListElement",
    "NumberedListElement",
    "ImageElement",
    "Slide",
    "PresentationDocument",
    "ValidationResult",
    "documents_equal",
]
