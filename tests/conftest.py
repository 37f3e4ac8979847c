"""
Pytest configuration and fixtures.
"""
import base64
import io

import pytest
from pptx import Presentation
from pptx.util import Inches, Pt

from slidesmith.core import Settings, get_settings
from slidesmith.core.debug import reset_save_count
from slidesmith.models import PresentationDocument

# 1x1 transparent PNG
PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)
PNG_DATA_URI = f"data:image/png;base64,{PNG_BASE64}"


@pytest.fixture
def clean_environment(monkeypatch, tmp_path):
    """Point settings at a temporary data directory and reset singletons."""
    for var in [
        "DEBUG",
        "AUTOSAVE_ENABLED",
        "AUTOSAVE_DEBOUNCE_SECONDS",
        "HISTORY_LIMIT",
        "MAX_IMPORT_BYTES",
        "REQUIRE_UNIQUE_IDS",
    ]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    # Long debounce so no timer fires behind a test's back
    monkeypatch.setenv("AUTOSAVE_DEBOUNCE_SECONDS", "60")

    get_settings.cache_clear()
    monkeypatch.setattr("slidesmith.services.editor.service._editor_service", None)
    monkeypatch.setattr("slidesmith.services.importer.pipeline._import_pipeline", None)
    reset_save_count()

    yield get_settings()

    get_settings.cache_clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the environment, with fast autosave."""
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        autosave_debounce_seconds=0.01,
    )


@pytest.fixture
def sample_data() -> dict:
    """A valid presentation as plain JSON data."""
    return {
        "title": "Quarterly Review",
        "author": "Finance Team",
        "slides": [
            {
                "id": "slide-1",
                "backgroundColor": "#ffffff",
                "elements": [
                    {"id": "element-1", "type": "heading", "content": "Q3 Results"},
                    {
                        "id": "element-2",
                        "type": "paragraph",
                        "content": "Revenue grew in every region.",
                        "style": {"fontSize": "18px", "textAlign": "left"},
                    },
                ],
            },
            {
                "id": "slide-2",
                "elements": [
                    {"id": "element-3", "type": "bullet-list", "content": ["North", "South", "West"]},
                    {"id": "element-4", "type": "numbered-list", "content": ["Plan", "Build", "Ship"]},
                ],
            },
        ],
    }


@pytest.fixture
def sample_document(sample_data) -> PresentationDocument:
    return PresentationDocument.model_validate(sample_data)


@pytest.fixture
def pptx_bytes() -> bytes:
    """A small deck built with python-pptx: title slide, bullets, picture."""
    prs = Presentation()
    prs.core_properties.title = "Fixture Deck"

    title_slide = prs.slides.add_slide(prs.slide_layouts[0])
    title_slide.shapes.title.text = "Welcome Aboard"

    blank = prs.slides.add_slide(prs.slide_layouts[6])
    textbox = blank.shapes.add_textbox(Inches(1), Inches(1), Inches(6), Inches(2))
    frame = textbox.text_frame
    frame.text = "First point"
    frame.add_paragraph().text = "Second point"
    frame.add_paragraph().text = "Third point"
    blank.shapes.add_picture(
        io.BytesIO(base64.b64decode(PNG_BASE64)), Inches(7), Inches(1), Inches(1), Inches(1)
    )

    note = blank.shapes.add_textbox(Inches(1), Inches(4), Inches(6), Inches(1))
    run = note.text_frame.paragraphs[0].add_run()
    run.text = "Just a sentence."
    run.font.size = Pt(14)

    buffer = io.BytesIO()
    prs.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def png_data_uri() -> str:
    return PNG_DATA_URI
