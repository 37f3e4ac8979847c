"""
PPTX exporter using python-pptx.

Renders a PresentationDocument as an editable 16:9 PowerPoint deck, one
slide per document slide. Elements that carry pixel geometry (``x``, ``y``,
``width``, ``height``) keep it; the rest are stacked top to bottom.
"""

import base64
import binascii
import io
import logging
import re
from typing import Any, Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import PP_ALIGN
from pptx.oxml.ns import qn
from pptx.util import Emu, Inches, Pt

from slidesmith.models import PresentationDocument, Slide

logger = logging.getLogger(__name__)

EMU_PER_PX = 9525
BLANK_LAYOUT = 6

SLIDE_WIDTH = Inches(10)
SLIDE_HEIGHT = Inches(5.625)
MARGIN = Inches(0.5)
GAP = Inches(0.15)

# Default box heights for elements without geometry
FLOW_HEIGHTS = {
    "heading": Inches(0.8),
    "paragraph": Inches(0.9),
    "bullet-list": Inches(1.6),
    "numbered-list": Inches(1.6),
    "image": Inches(2.5),
}

DEFAULT_FONT_SIZES = {
    "heading": 32,
    "paragraph": 16,
    "bullet-list": 16,
    "numbered-list": 16,
}

ALIGNMENTS = {
    "left": PP_ALIGN.LEFT,
    "center": PP_ALIGN.CENTER,
    "right": PP_ALIGN.RIGHT,
    "justify": PP_ALIGN.JUSTIFY,
}

HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6})$")
DATA_URI = re.compile(r"^data:image/[\w.+-]+;base64,(?P<data>.+)$", re.DOTALL)


def parse_font_size(value: Any) -> Optional[float]:
    """Convert a CSS-ish font size (``24``, ``"18px"``, ``"1.5rem"``) to points."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value > 0 else None
    if isinstance(value, str):
        text = value.strip().lower()
        try:
            if text.endswith("rem"):
                return float(text[:-3]) * 16
            if text.endswith("px"):
                return float(text[:-2])
            return float(text)
        except ValueError:
            return None
    return None


def _style(element) -> dict:
    style = (element.model_extra or {}).get("style")
    return style if isinstance(style, dict) else {}


def _geometry(element) -> Optional[tuple[int, int, int, int]]:
    extra = element.model_extra or {}
    values = [extra.get(key) for key in ("x", "y", "width", "height")]
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values):
        return None
    x, y, width, height = values
    if width <= 0 or height <= 0:
        return None
    return (
        Emu(int(x * EMU_PER_PX)),
        Emu(int(y * EMU_PER_PX)),
        Emu(int(width * EMU_PER_PX)),
        Emu(int(height * EMU_PER_PX)),
    )


def _set_bullet(paragraph, numbered: bool) -> None:
    p_pr = paragraph._p.get_or_add_pPr()
    p_pr.set("marL", "342900")
    p_pr.set("indent", "-342900")
    if numbered:
        bullet = p_pr.makeelement(qn("a:buAutoNum"), {"type": "arabicPeriod"})
    else:
        bullet = p_pr.makeelement(qn("a:buChar"), {"char": "•"})
    p_pr.append(bullet)


class PptxExporter:
    """Render documents into PowerPoint files."""

    def export(self, document: PresentationDocument) -> bytes:
        """
        Build a .pptx for a document.

        Returns:
            The PowerPoint file as bytes
        """
        prs = Presentation()
        prs.slide_width = SLIDE_WIDTH
        prs.slide_height = SLIDE_HEIGHT
        prs.core_properties.title = document.title

        author = (document.model_extra or {}).get("author")
        if isinstance(author, str) and author:
            prs.core_properties.author = author

        for slide in document.slides:
            self._render_slide(prs, slide)

        buffer = io.BytesIO()
        prs.save(buffer)
        logger.info(f"Exported '{document.title}' to PPTX ({len(document.slides)} slides)")
        return buffer.getvalue()

    def _render_slide(self, prs, slide: Slide) -> None:
        pptx_slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT])

        background = (slide.model_extra or {}).get("backgroundColor")
        match = HEX_COLOR.match(background) if isinstance(background, str) else None
        if match:
            fill = pptx_slide.background.fill
            fill.solid()
            fill.fore_color.rgb = RGBColor.from_string(match.group(1).upper())

        top = MARGIN
        content_width = SLIDE_WIDTH - 2 * MARGIN
        for element in slide.elements:
            box = _geometry(element)
            if box is None:
                height = FLOW_HEIGHTS[element.type]
                box = (MARGIN, top, content_width, height)
                top += height + GAP

            if element.type == "image":
                self._add_image(pptx_slide, element, box)
            else:
                self._add_text(pptx_slide, element, box)

    def _add_text(self, pptx_slide, element, box) -> None:
        textbox = pptx_slide.shapes.add_textbox(*box)
        text_frame = textbox.text_frame
        text_frame.word_wrap = True

        items = element.content if isinstance(element.content, list) else [element.content]
        style = _style(element)
        font_size = parse_font_size(style.get("fontSize")) or DEFAULT_FONT_SIZES[element.type]
        alignment = ALIGNMENTS.get(style.get("textAlign"))
        color = HEX_COLOR.match(style["color"]) if isinstance(style.get("color"), str) else None

        for index, item in enumerate(items):
            paragraph = text_frame.paragraphs[0] if index == 0 else text_frame.add_paragraph()
            run = paragraph.add_run()
            run.text = item
            run.font.size = Pt(font_size)
            if element.type == "heading":
                run.font.bold = True
            if color:
                run.font.color.rgb = RGBColor.from_string(color.group(1).upper())
            if alignment is not None:
                paragraph.alignment = alignment
            if element.type in ("bullet-list", "numbered-list"):
                _set_bullet(paragraph, numbered=element.type == "numbered-list")

    def _add_image(self, pptx_slide, element, box) -> None:
        match = DATA_URI.match(element.content)
        if match:
            try:
                blob = base64.b64decode(match.group("data"), validate=True)
                left, top, width, height = box
                pptx_slide.shapes.add_picture(io.BytesIO(blob), left, top, width, height)
                return
            except (binascii.Error, ValueError, OSError) as e:
                logger.warning(f"Could not embed image {element.id}: {e}")

        # Remote URLs and placeholders are not fetched
        textbox = pptx_slide.shapes.add_textbox(*box)
        paragraph = textbox.text_frame.paragraphs[0]
        paragraph.text = "[Image Placeholder]"
        paragraph.alignment = PP_ALIGN.CENTER


def export_pptx(document: PresentationDocument) -> bytes:
    """Render a document with a default exporter."""
    return PptxExporter().export(document)
