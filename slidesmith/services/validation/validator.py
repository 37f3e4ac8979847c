"""
Presentation schema validation.

Untrusted structured data (usually freshly parsed JSON) is checked against
the document invariants before it may become an editing session's state.
The validator is total: any input shape yields a ``ValidationResult`` and
nothing is ever raised. Checks run in document order and the first
violation wins.
"""

import logging
import math
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from slidesmith.core.errors import SchemaViolationError
from slidesmith.models import (
    ELEMENT_TYPES,
    LIST_ELEMENT_TYPES,
    TEXT_ELEMENT_TYPES,
    PresentationDocument,
    ValidationResult,
)

logger = logging.getLogger(__name__)

VALID_TYPES_TEXT = ", ".join(ELEMENT_TYPES)


def _is_valid_id(value: Any) -> bool:
    """Ids are non-empty strings or finite non-zero numbers."""
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return math.isfinite(value) and value != 0
    return False


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _id_key(value: Any) -> tuple:
    # "1" and 1 are different ids
    return (type(value).__name__ if isinstance(value, str) else "number", value)


def _validate_element(element: Any, i: int, j: int) -> str | None:
    where = f"Element at index {j} in slide {i}"
    
    if not isinstance(element, Mapping):
        return f"{where} must be an object"
    
    if not _is_valid_id(element.get("id")):
        return f"{where} must have an id"
    
    element_type = element.get("type")
    if not element_type:
        return f"{where} must have a type"
    
    # Tuple membership compares by equality, so unhashable junk is fine here
    if not isinstance(element_type, str) or element_type not in ELEMENT_TYPES:
        return f"{where} has invalid type. Must be one of: {VALID_TYPES_TEXT}"
    
    if "content" not in element:
        return f"{where} must have content"
    
    content = element["content"]
    if element_type in LIST_ELEMENT_TYPES:
        if not _is_sequence(content):
            return f"{where} of type {element_type} must have an array content"
        if not all(isinstance(item, str) for item in content):
            return f"{where} of type {element_type} must have only string items"
    
    if element_type in TEXT_ELEMENT_TYPES and not isinstance(content, str):
        return f"{where} of type {element_type} must have a string content"
    
    return None


def validate_presentation(data: Any, require_unique_ids: bool = False) -> ValidationResult:
    """
    Validate untrusted data against the presentation schema.
    
    Args:
        data: Arbitrary parsed data
        require_unique_ids: Also reject duplicate slide ids and duplicate
            element ids within a slide
        
    Returns:
        ValidationResult with ``valid`` and, on rejection, the first error
    """
    if not isinstance(data, Mapping):
        return ValidationResult.fail("Data must be an object")
    
    title = data.get("title")
    if not title:
        return ValidationResult.fail("Presentation must have a title")
    if not isinstance(title, str):
        return ValidationResult.fail("Presentation title must be a string")
    
    slides = data.get("slides")
    if not _is_sequence(slides):
        return ValidationResult.fail("Presentation must have a slides array")
    
    seen_slide_ids: set[tuple] = set()
    for i, slide in enumerate(slides):
        if not isinstance(slide, Mapping):
            return ValidationResult.fail(f"Slide at index {i} must be an object")
        
        slide_id = slide.get("id")
        if not _is_valid_id(slide_id):
            return ValidationResult.fail(f"Slide at index {i} must have an id")
        
        if require_unique_ids:
            key = _id_key(slide_id)
            if key in seen_slide_ids:
                return ValidationResult.fail(f"Duplicate slide id {slide_id!r} at index {i}")
            seen_slide_ids.add(key)
        
        elements = slide.get("elements")
        if not _is_sequence(elements):
            return ValidationResult.fail(f"Slide at index {i} must have an elements array")
        
        seen_element_ids: set[tuple] = set()
        for j, element in enumerate(elements):
            error = _validate_element(element, i, j)
            if error:
                return ValidationResult.fail(error)
            
            if require_unique_ids:
                key = _id_key(element["id"])
                if key in seen_element_ids:
                    return ValidationResult.fail(
                        f"Duplicate element id {element['id']!r} at index {j} in slide {i}"
                    )
                seen_element_ids.add(key)
    
    return ValidationResult.ok()


def parse_presentation(data: Any, require_unique_ids: bool = False) -> PresentationDocument:
    """
    Validate data and build a PresentationDocument from it.
    
    Raises:
        SchemaViolationError: If the data is not a valid presentation
    """
    result = validate_presentation(data, require_unique_ids=require_unique_ids)
    if not result.valid:
        logger.debug(f"Rejected presentation data: {result.error}")
        raise SchemaViolationError(result.error)
    
    try:
        return PresentationDocument.model_validate(data)
    except ValidationError as e:
        # Only reachable for shapes the validator lets through but pydantic
        # cannot coerce, e.g. a Mapping subclass pydantic refuses
        raise SchemaViolationError(str(e)) from e
