"""JSON export and download file naming."""
import json
import re

from slidesmith.models import PresentationDocument

WHITESPACE = re.compile(r"\s+")


def export_filename(title: str, extension: str) -> str:
    """Download name for a document: whitespace runs become underscores."""
    stem = WHITESPACE.sub("_", title.strip()) or "presentation"
    return f"{stem}.{extension.lstrip('.')}"


def export_json(document: PresentationDocument) -> str:
    """Serialize a document, extras included, as indented JSON."""
    return json.dumps(document.to_dict(), indent=2, ensure_ascii=False, allow_nan=False)
