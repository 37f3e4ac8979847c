"""
Document edit operations.

Every function takes a document and returns a new one; the input is never
modified, so the result can be handed straight to ``HistoryManager.set``
while the previous snapshot stays intact in the undo stack.
"""

import uuid
from typing import Any, Optional

from pydantic import TypeAdapter

from slidesmith.core.errors import DocumentOperationError
from slidesmith.models import Element, ElementId, PresentationDocument, Slide

_element_adapter = TypeAdapter(Element)

# Default content per element type, as a freshly inserted element shows it
ELEMENT_DEFAULTS: dict[str, Any] = {
    "heading": "New Heading",
    "paragraph": "New paragraph text. Click to edit.",
    "bullet-list": ["First item", "Second item", "Third item"],
    "numbered-list": ["First item", "Second item", "Third item"],
    "image": "/placeholder.svg?height=300&width=400",
}


def create_element_id() -> str:
    return f"element-{uuid.uuid4()}"


def create_slide_id() -> str:
    return f"slide-{uuid.uuid4()}"


def create_element(element_type: str, **overrides: Any) -> Element:
    """
    Create a new element with the defaults for its type.

    Args:
        element_type: One of the element type tags
        **overrides: Field values replacing the defaults (including extras
            such as ``x``/``y`` or ``style``)
    """
    if element_type not in ELEMENT_DEFAULTS:
        raise DocumentOperationError(f"Unknown element type: {element_type}")

    content = ELEMENT_DEFAULTS[element_type]
    data = {
        "id": create_element_id(),
        "type": element_type,
        "content": list(content) if isinstance(content, list) else content,
    }
    data.update(overrides)
    return _element_adapter.validate_python(data)


def _copy(document: PresentationDocument) -> PresentationDocument:
    return document.model_copy(deep=True)


def _slide_index(document: PresentationDocument, slide_id: ElementId) -> int:
    index = document.find_slide(slide_id)
    if index < 0:
        raise DocumentOperationError(f"Slide not found: {slide_id}")
    return index


def _element_index(slide: Slide, element_id: ElementId) -> int:
    index = slide.find_element(element_id)
    if index < 0:
        raise DocumentOperationError(f"Element not found: {element_id} in slide {slide.id}")
    return index


def rename(document: PresentationDocument, title: str) -> PresentationDocument:
    if not title or not title.strip():
        raise DocumentOperationError("Presentation title cannot be empty")
    updated = _copy(document)
    updated.title = title
    return updated


def add_slide(
    document: PresentationDocument,
    slide: Optional[Slide] = None,
    position: Optional[int] = None,
) -> PresentationDocument:
    """Insert a slide (a blank one by default) at ``position`` or at the end."""
    updated = _copy(document)
    new_slide = slide.model_copy(deep=True) if slide else Slide(id=create_slide_id(), elements=[])
    if position is None:
        updated.slides.append(new_slide)
    else:
        updated.slides.insert(max(0, min(position, len(updated.slides))), new_slide)
    return updated


def remove_slide(document: PresentationDocument, slide_id: ElementId) -> PresentationDocument:
    index = _slide_index(document, slide_id)
    updated = _copy(document)
    del updated.slides[index]
    return updated


def move_slide(document: PresentationDocument, slide_id: ElementId, position: int) -> PresentationDocument:
    """Move a slide to a new display position (clamped to the valid range)."""
    index = _slide_index(document, slide_id)
    updated = _copy(document)
    slide = updated.slides.pop(index)
    updated.slides.insert(max(0, min(position, len(updated.slides))), slide)
    return updated


def duplicate_slide(document: PresentationDocument, slide_id: ElementId) -> PresentationDocument:
    """Copy a slide right after the original, with fresh slide and element ids."""
    index = _slide_index(document, slide_id)
    updated = _copy(document)
    clone = updated.slides[index].model_copy(deep=True)
    clone.id = create_slide_id()
    for element in clone.elements:
        element.id = create_element_id()
    updated.slides.insert(index + 1, clone)
    return updated


def add_element(
    document: PresentationDocument,
    slide_id: ElementId,
    element: Element,
) -> PresentationDocument:
    """Append an element on top of a slide's stack."""
    index = _slide_index(document, slide_id)
    updated = _copy(document)
    updated.slides[index].elements.append(element.model_copy(deep=True))
    return updated


def update_element_content(
    document: PresentationDocument,
    slide_id: ElementId,
    element_id: ElementId,
    content: Any,
) -> PresentationDocument:
    """Replace an element's content; the shape must match the element type."""
    slide_index = _slide_index(document, slide_id)
    element_index = _element_index(document.slides[slide_index], element_id)

    updated = _copy(document)
    current = updated.slides[slide_index].elements[element_index]
    data = current.model_dump()
    data["content"] = content
    try:
        replacement = _element_adapter.validate_python(data)
    except ValueError as e:
        raise DocumentOperationError(
            f"Invalid content for {current.type} element {element_id}: {e}"
        ) from e

    updated.slides[slide_index].elements[element_index] = replacement
    return updated


def remove_element(
    document: PresentationDocument,
    slide_id: ElementId,
    element_id: ElementId,
) -> PresentationDocument:
    slide_index = _slide_index(document, slide_id)
    element_index = _element_index(document.slides[slide_index], element_id)
    updated = _copy(document)
    del updated.slides[slide_index].elements[element_index]
    return updated
