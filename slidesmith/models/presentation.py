"""
Presentation document models.

A document is a title plus an ordered list of slides; each slide holds an
ordered list of elements. Element variants form a closed set keyed on
``type`` so every variant carries its own content shape.
"""
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ElementId = Union[str, int, float]

ELEMENT_TYPES = ("heading", "paragraph", "bullet-list", "numbered-list", "image")
LIST_ELEMENT_TYPES = ("bullet-list", "numbered-list")
TEXT_ELEMENT_TYPES = ("heading", "paragraph", "image")


def _same_id(value: ElementId, wanted: ElementId) -> bool:
    # Ids taken from URL paths arrive as strings
    return value == wanted or (isinstance(wanted, str) and str(value) == wanted)


class _ElementBase(BaseModel):
    """Fields shared by every element variant.
    
    Unknown keys (position, size, style, ...) are kept as extras so a
    document survives an import/export round trip untouched.
    """
    model_config = ConfigDict(extra="allow")
    
    id: ElementId = Field(..., description="Identifier, unique within its slide")


class HeadingElement(_ElementBase):
    type: Literal["heading"] = "heading"
    content: str


class ParagraphElement(_ElementBase):
    type: Literal["paragraph"] = "paragraph"
    content: str


class BulletListElement(_ElementBase):
    type: Literal["bullet-list"] = "bullet-list"
    content: list[str]


class NumberedListElement(_ElementBase):
    type: Literal["numbered-list"] = "numbered-list"
    content: list[str]


class ImageElement(_ElementBase):
    """An image; ``content`` is the image URL or a ``data:`` URI."""
    type: Literal["image"] = "image"
    content: str


Element = Annotated[
    Union[HeadingElement, ParagraphElement, BulletListElement, NumberedListElement, ImageElement],
    Field(discriminator="type"),
]


class Slide(BaseModel):
    """A single slide; element order is stacking/reading order."""
    model_config = ConfigDict(extra="allow")
    
    id: ElementId = Field(..., description="Identifier, unique within the document")
    elements: list[Element] = Field(default_factory=list)
    
    def find_element(self, element_id: ElementId) -> int:
        """Return the index of an element, or -1 when absent."""
        for index, element in enumerate(self.elements):
            if _same_id(element.id, element_id):
                return index
        return -1


class PresentationDocument(BaseModel):
    """The whole presentation held by an editing session."""
    model_config = ConfigDict(extra="allow")
    
    title: str = Field(..., min_length=1, description="Presentation title")
    slides: list[Slide] = Field(default_factory=list, description="Slides in display order")
    
    def find_slide(self, slide_id: ElementId) -> int:
        """Return the index of a slide, or -1 when absent."""
        for index, slide in enumerate(self.slides):
            if _same_id(slide.id, slide_id):
                return index
        return -1
    
    def to_dict(self) -> dict[str, Any]:
        """Export to dict for JSON serialization."""
        return self.model_dump(mode="json")
    
    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PresentationDocument":
        """Load from an already validated dict."""
        return cls.model_validate(data)


def documents_equal(left: PresentationDocument, right: PresentationDocument) -> bool:
    """Deep value equality over the serialized form of two documents."""
    if left is right:
        return True
    return left.to_dict() == right.to_dict()


class ValidationResult(BaseModel):
    """Outcome of validating untrusted presentation data."""
    
    valid: bool = Field(..., description="Whether the data is a well-formed presentation")
    error: str | None = Field(default=None, description="First violation found, in document order")
    
    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)
    
    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)
