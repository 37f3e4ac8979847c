"""
Import pipeline.

Turns an uploaded file into a validated PresentationDocument or a precise
rejection. JSON is parsed directly; PowerPoint files are decoded in a worker
thread. Either way the candidate data goes through the schema validator, and
only an accepted document ever reaches the editing history, which it
replaces wholesale via ``reset``.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import Any, Optional, Union

from slidesmith.core import get_settings
from slidesmith.core.errors import DocumentImportError, ImportErrorKind
from slidesmith.models import PresentationDocument
from slidesmith.services.history import HistoryManager
from slidesmith.services.validation import validate_presentation

from .pptx_decoder import PptxDecoder

logger = logging.getLogger(__name__)


class ImportType(str, Enum):
    """Supported source formats."""

    JSON = "json"
    PPTX = "pptx"


EXTENSION_TYPES = {
    ".json": ImportType.JSON,
    ".pptx": ImportType.PPTX,
}


@dataclass
class ImportFile:
    """An uploaded file: its name (for type sniffing) and raw bytes."""

    filename: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


def detect_import_type(filename: str) -> Optional[ImportType]:
    """Guess the import type from the file extension."""
    return EXTENSION_TYPES.get(PurePath(filename or "").suffix.lower())


def resolve_import_type(
    filename: str,
    override: Optional[Union[ImportType, str]] = None,
) -> ImportType:
    """
    Pick the import type, honoring an explicit override over detection.

    Raises:
        DocumentImportError: UNSUPPORTED_TYPE if no type can be determined
    """
    if isinstance(override, ImportType):
        return override

    if override:
        try:
            return ImportType(override.strip().lower())
        except ValueError:
            raise DocumentImportError(
                ImportErrorKind.UNSUPPORTED_TYPE,
                f"Unsupported import type: {override}. Use one of: json, pptx",
            )

    detected = detect_import_type(filename)
    if detected is None:
        raise DocumentImportError(
            ImportErrorKind.UNSUPPORTED_TYPE,
            f"Cannot tell the format of {filename!r}; choose JSON or PowerPoint",
        )
    return detected


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON value: {name}")


class ImportPipeline:
    """Validating importer for JSON and PowerPoint presentations."""

    def __init__(
        self,
        decoder: Optional[PptxDecoder] = None,
        max_bytes: Optional[int] = None,
        require_unique_ids: bool = False,
    ):
        self._decoder = decoder or PptxDecoder()
        self._max_bytes = max_bytes
        self._require_unique_ids = require_unique_ids

    async def load(
        self,
        upload: ImportFile,
        import_type: Optional[Union[ImportType, str]] = None,
    ) -> PresentationDocument:
        """
        Convert an upload into a validated document without touching any history.

        Args:
            upload: The uploaded file
            import_type: Explicit format; overrides extension detection

        Raises:
            DocumentImportError: On any rejection
        """
        kind = resolve_import_type(upload.filename, import_type)

        if self._max_bytes is not None and upload.size > self._max_bytes:
            raise DocumentImportError(
                ImportErrorKind.MALFORMED_INPUT,
                f"File is too large ({upload.size} bytes, limit {self._max_bytes})",
            )

        if kind == ImportType.JSON:
            data = self._parse_json(upload.content)
        else:
            data = await asyncio.to_thread(self._decoder.decode, upload.content, upload.filename)

        document = self._accept(data)
        logger.info(
            f"Imported {upload.filename} as {kind.value}: "
            f"'{document.title}' with {len(document.slides)} slides"
        )
        return document

    async def import_into(
        self,
        history: HistoryManager[PresentationDocument],
        upload: ImportFile,
        import_type: Optional[Union[ImportType, str]] = None,
    ) -> PresentationDocument:
        """
        Import a file and start a fresh history chain with it.

        A rejected import raises before the history is touched.
        """
        document = await self.load(upload, import_type)
        history.reset(document)
        return history.present

    def _parse_json(self, content: bytes) -> Any:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DocumentImportError(
                ImportErrorKind.MALFORMED_INPUT,
                f"File is not UTF-8 text: {e.reason}",
            ) from e

        try:
            return json.loads(text, parse_constant=_reject_constant)
        except ValueError as e:
            logger.info(f"Rejected JSON import: {e}")
            raise DocumentImportError(
                ImportErrorKind.MALFORMED_INPUT,
                f"Failed to parse JSON file: {e}",
            ) from e

    def _accept(self, data: Any) -> PresentationDocument:
        result = validate_presentation(data, require_unique_ids=self._require_unique_ids)
        if not result.valid:
            logger.info(f"Rejected import: {result.error}")
            raise DocumentImportError(ImportErrorKind.SCHEMA_VIOLATION, result.error)
        return PresentationDocument.model_validate(data)


# Singleton instance
_import_pipeline: Optional[ImportPipeline] = None


def get_import_pipeline() -> ImportPipeline:
    """Get the singleton import pipeline configured from settings."""
    global _import_pipeline
    if _import_pipeline is None:
        settings = get_settings()
        _import_pipeline = ImportPipeline(
            max_bytes=settings.max_import_bytes,
            require_unique_ids=settings.require_unique_ids,
        )
    return _import_pipeline
