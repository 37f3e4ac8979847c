"""
PowerPoint decoder.

Maps the slides and shapes of a ``.pptx`` package onto plain presentation
data (dicts and lists). The output is untrusted like any other import and
goes through the schema validator before it is accepted.
"""
import base64
import io
import logging
from pathlib import Path
from typing import Any, Iterator, Optional

from pptx import Presentation
from pptx.enum.shapes import PP_PLACEHOLDER
from pptx.oxml.ns import qn
from pptx.shapes.group import GroupShape
from pptx.shapes.picture import Picture

from slidesmith.core.errors import DocumentImportError, ImportErrorKind

logger = logging.getLogger(__name__)

# 914400 EMU per inch, 96 px per inch
EMU_PER_PX = 9525

TITLE_PLACEHOLDERS = (PP_PLACEHOLDER.TITLE, PP_PLACEHOLDER.CENTER_TITLE)

# (scale_x, scale_y, offset_x, offset_y) from a shape's coordinate space to the slide's
IDENTITY = (1.0, 1.0, 0.0, 0.0)


def _group_transform(group, parent: tuple) -> tuple:
    """Compose a group's child-to-parent mapping onto the parent's transform."""
    xfrm = group._element.find(f"{qn('p:grpSpPr')}/{qn('a:xfrm')}")
    if xfrm is None:
        return parent
    off, ext = xfrm.find(qn("a:off")), xfrm.find(qn("a:ext"))
    ch_off, ch_ext = xfrm.find(qn("a:chOff")), xfrm.find(qn("a:chExt"))
    if off is None or ext is None or ch_off is None or ch_ext is None:
        return parent

    ch_cx, ch_cy = int(ch_ext.get("cx")), int(ch_ext.get("cy"))
    sx = int(ext.get("cx")) / ch_cx if ch_cx else 1.0
    sy = int(ext.get("cy")) / ch_cy if ch_cy else 1.0
    psx, psy, pdx, pdy = parent
    return (
        psx * sx,
        psy * sy,
        pdx + psx * (int(off.get("x")) - int(ch_off.get("x")) * sx),
        pdy + psy * (int(off.get("y")) - int(ch_off.get("y")) * sy),
    )


def _iter_shapes(shapes, transform: tuple = IDENTITY) -> Iterator[tuple]:
    """Yield (shape, transform) in z-order, descending into groups."""
    for shape in shapes:
        if isinstance(shape, GroupShape):
            yield from _iter_shapes(shape.shapes, _group_transform(shape, transform))
        else:
            yield shape, transform


def _geometry(shape, transform: tuple = IDENTITY) -> dict:
    """Shape position/size in slide pixels; absent for inherited placeholder geometry."""
    sx, sy, dx, dy = transform
    geometry = {}
    for key, value, scale, offset in (
        ("x", shape.left, sx, dx),
        ("y", shape.top, sy, dy),
        ("width", shape.width, sx, 0.0),
        ("height", shape.height, sy, 0.0),
    ):
        if value is not None:
            geometry[key] = round((offset + int(value) * scale) / EMU_PER_PX)
    return geometry


def _is_title(shape) -> bool:
    if not shape.is_placeholder:
        return False
    try:
        return shape.placeholder_format.type in TITLE_PLACEHOLDERS
    except ValueError:
        return False


def _list_kind(paragraph) -> Optional[str]:
    """Element type implied by explicit paragraph bullet markup, if any."""
    p_pr = paragraph._p.pPr
    if p_pr is None:
        return None
    if p_pr.find(qn("a:buAutoNum")) is not None:
        return "numbered-list"
    if p_pr.find(qn("a:buChar")) is not None:
        return "bullet-list"
    return None


def _is_bold(paragraph) -> bool:
    runs = [run for run in paragraph.runs if run.text.strip()]
    return bool(runs) and all(run.font.bold for run in runs)


def _text_element(shape) -> Optional[dict]:
    paragraphs = [p for p in shape.text_frame.paragraphs if p.text.strip()]
    if not paragraphs:
        return None

    texts = [p.text.strip() for p in paragraphs]

    if _is_title(shape):
        return {"type": "heading", "content": " ".join(texts)}

    kinds = {_list_kind(p) for p in paragraphs}
    if "numbered-list" in kinds:
        return {"type": "numbered-list", "content": texts}

    if "bullet-list" in kinds or len(texts) > 1:
        return {"type": "bullet-list", "content": texts}

    if _is_bold(paragraphs[0]):
        return {"type": "heading", "content": texts[0]}

    return {"type": "paragraph", "content": texts[0]}


def _image_element(shape) -> dict:
    image = shape.image
    encoded = base64.b64encode(image.blob).decode("ascii")
    element = {"type": "image", "content": f"data:{image.content_type};base64,{encoded}"}
    description = shape._element.xpath("./p:nvPicPr/p:cNvPr/@descr")
    if description:
        element["alt"] = description[0]
    return element


class PptxDecoder:
    """Decode ``.pptx`` bytes into presentation data."""

    def decode(self, content: bytes, filename: str = "presentation.pptx") -> dict:
        """
        Decode a PowerPoint file.

        Args:
            content: Raw file bytes
            filename: Original file name; its stem is the fallback title

        Returns:
            Presentation-shaped data (not yet validated)

        Raises:
            DocumentImportError: DECODE_FAILURE if the package cannot be read
        """
        try:
            prs = Presentation(io.BytesIO(content))
        except Exception as e:
            logger.warning(f"Failed to open PowerPoint file {filename}: {e}")
            raise DocumentImportError(
                ImportErrorKind.DECODE_FAILURE,
                f"Not a readable PowerPoint file: {e}",
            ) from e

        title = (prs.core_properties.title or "").strip() or Path(filename).stem or "Imported Presentation"

        slides = []
        for index, slide in enumerate(prs.slides):
            elements = []
            for shape, transform in _iter_shapes(slide.shapes):
                element = self._decode_shape(shape)
                if element is None:
                    continue
                element["id"] = f"element-{shape.shape_id}"
                element.update(_geometry(shape, transform))
                elements.append(element)

            slides.append({"id": f"slide-{slide.slide_id}", "elements": elements})
            logger.debug(f"Decoded slide {index + 1} with {len(elements)} elements")

        logger.info(f"Decoded {filename}: {len(slides)} slides")
        return {"title": title, "slides": slides}

    def _decode_shape(self, shape) -> Optional[dict]:
        if isinstance(shape, Picture):
            try:
                return _image_element(shape)
            except (AttributeError, KeyError, ValueError) as e:
                # Linked (not embedded) pictures have no blob
                logger.debug(f"Skipping picture {shape.shape_id}: {e}")
                return None

        if shape.has_text_frame:
            return _text_element(shape)

        logger.debug(f"Skipping unsupported shape {shape.shape_id} ({type(shape).__name__})")
        return None
