"""
Unit tests for data models.
"""
import pytest
from pydantic import ValidationError

from slidesmith.models import (
    BulletListElement,
    HeadingElement,
    PresentationDocument,
    Slide,
    ValidationResult,
    documents_equal,
)


class TestElements:
    """Tests for the element variants."""

    def test_discriminated_by_type(self, sample_document):
        """Each element parses into the variant named by its type."""
        first, second = sample_document.slides[0].elements
        bullets = sample_document.slides[1].elements[0]

        assert isinstance(first, HeadingElement)
        assert isinstance(bullets, BulletListElement)
        assert bullets.content == ["North", "South", "West"]
        assert second.type == "paragraph"

    def test_extras_preserved(self, sample_document):
        """Unknown fields survive parsing and serialization."""
        paragraph = sample_document.slides[0].elements[1]

        assert paragraph.model_extra["style"] == {"fontSize": "18px", "textAlign": "left"}
        assert sample_document.model_extra["author"] == "Finance Team"
        assert sample_document.slides[0].model_extra["backgroundColor"] == "#ffffff"

    def test_list_element_rejects_string_content(self):
        with pytest.raises(ValidationError):
            Slide.model_validate({"id": "s", "elements": [{"id": "e", "type": "bullet-list", "content": "x"}]})

    def test_type_default(self):
        element = HeadingElement(id="e1", content="Hello")

        assert element.type == "heading"


class TestSlide:
    """Tests for the Slide model."""

    def test_find_element(self, sample_document):
        slide = sample_document.slides[1]

        assert slide.find_element("element-4") == 1
        assert slide.find_element("missing") == -1

    def test_find_numeric_id_by_string(self):
        """Ids arriving as path strings still match numeric ids."""
        slide = Slide.model_validate({"id": 1, "elements": [{"id": 7, "type": "heading", "content": "x"}]})

        assert slide.find_element("7") == 0
        assert slide.find_element(7) == 0


class TestPresentationDocument:
    """Tests for the PresentationDocument model."""

    def test_to_dict_round_trip(self, sample_data, sample_document):
        """Serialization gives back the original data, extras included."""
        assert sample_document.to_dict() == sample_data
        assert PresentationDocument.from_dict(sample_document.to_dict()) == sample_document

    def test_find_slide(self, sample_document):
        assert sample_document.find_slide("slide-2") == 1
        assert sample_document.find_slide("slide-9") == -1

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            PresentationDocument(title="", slides=[])

    def test_documents_equal(self, sample_data):
        left = PresentationDocument.model_validate(sample_data)
        right = PresentationDocument.model_validate(sample_data)
        changed = left.model_copy(update={"title": "Other"})

        assert documents_equal(left, right)
        assert documents_equal(left, left)
        assert not documents_equal(left, changed)


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_ok(self):
        result = ValidationResult.ok()

        assert result.valid is True
        assert result.error is None

    def test_fail(self):
        result = ValidationResult.fail("Data must be an object")

        assert result.model_dump() == {"valid": False, "error": "Data must be an object"}
