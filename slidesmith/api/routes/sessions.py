"""Editing session API endpoints."""
import logging
from typing import Any, Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, File, Form, HTTPException, UploadFile
from fastapi.responses import Response

from slidesmith.core import get_settings
from slidesmith.core.errors import (
    DocumentImportError,
    ImportErrorKind,
    SchemaViolationError,
    SessionNotFoundError,
)
from slidesmith.models import PresentationDocument
from slidesmith.services import (
    export_filename,
    export_json,
    export_pptx,
    get_editor_service,
    get_import_pipeline,
    parse_presentation,
)
from slidesmith.services.editor import EditorSession
from slidesmith.services.importer import ImportFile

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/sessions", tags=["sessions"])

PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"


def get_session_or_404(session_id: str) -> EditorSession:
    """Look up an open session, reopening it from storage if needed."""
    try:
        return get_editor_service().open_session(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Session not found")
    except SchemaViolationError as e:
        raise HTTPException(
            status_code=422,
            detail={"kind": ImportErrorKind.SCHEMA_VIOLATION.value, "message": e.message},
        )


def parse_document_or_422(data: Any) -> PresentationDocument:
    try:
        return parse_presentation(data, require_unique_ids=get_settings().require_unique_ids)
    except SchemaViolationError as e:
        raise HTTPException(
            status_code=422,
            detail={"kind": ImportErrorKind.SCHEMA_VIOLATION.value, "message": e.message},
        )


def attachment_header(filename: str) -> str:
    # Latin-1 only in headers; the UTF-8 form carries the real name
    fallback = filename.encode("ascii", "ignore").decode("ascii").replace('"', "") or "presentation"
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


@router.post("", status_code=201)
async def create_session(document: Any = Body(default=None)) -> dict[str, Any]:
    """
    Start a new editing session.

    The optional body is an initial presentation; it is validated like an
    import. Without a body the session starts from the default document.
    """
    initial = parse_document_or_422(document) if document is not None else None
    session = get_editor_service().create_session(initial)
    return session.to_dict()


@router.get("/{session_id}")
async def get_session(session_id: str) -> dict[str, Any]:
    """Get the present document, undo/redo availability and save status."""
    return get_session_or_404(session_id).to_dict()


@router.delete("/{session_id}")
async def close_session(session_id: str) -> dict[str, Any]:
    """Flush unsaved work and close the session."""
    get_session_or_404(session_id)
    saved = await get_editor_service().close_session(session_id)
    return {"session_id": session_id, "saved": saved}


@router.put("/{session_id}/document")
async def update_document(
    session_id: str,
    document: Any = Body(...),
) -> dict[str, Any]:
    """
    Record an edit: the body replaces the present document.

    Identical documents are a no-op and do not add an undo step.
    """
    session = get_session_or_404(session_id)
    session.history.set(parse_document_or_422(document))
    return session.to_dict()


@router.post("/{session_id}/undo")
async def undo(session_id: str) -> dict[str, Any]:
    session = get_session_or_404(session_id)
    session.history.undo()
    return session.to_dict()


@router.post("/{session_id}/redo")
async def redo(session_id: str) -> dict[str, Any]:
    session = get_session_or_404(session_id)
    session.history.redo()
    return session.to_dict()


@router.post("/{session_id}/save")
async def save(session_id: str) -> dict[str, Any]:
    """
    Save immediately (also the manual retry after a failed autosave).

    A failed save is reported in the autosave status, not as an HTTP error.
    """
    session = get_session_or_404(session_id)
    await session.autosave.save()
    return session.to_dict()


@router.post("/{session_id}/import")
async def import_file(
    session_id: str,
    file: UploadFile = File(...),
    import_type: Optional[str] = Form(default=None),
) -> dict[str, Any]:
    """
    Replace the session's document with an uploaded JSON or PowerPoint file.

    ``import_type`` overrides the type detected from the file extension.
    The import starts a fresh undo history; rejected imports leave the
    session untouched.
    """
    session = get_session_or_404(session_id)
    upload = ImportFile(filename=file.filename or "", content=await file.read())

    try:
        await get_import_pipeline().import_into(session.history, upload, import_type)
    except DocumentImportError as e:
        status_code = 415 if e.kind == ImportErrorKind.UNSUPPORTED_TYPE else 422
        raise HTTPException(status_code=status_code, detail=e.to_dict())

    return session.to_dict()


@router.get("/{session_id}/export/json")
async def export_session_json(session_id: str) -> Response:
    document = get_session_or_404(session_id).document
    filename = export_filename(document.title, "json")
    return Response(
        content=export_json(document),
        media_type="application/json",
        headers={"Content-Disposition": attachment_header(filename)},
    )


@router.get("/{session_id}/export/pptx")
async def export_session_pptx(session_id: str) -> Response:
    document = get_session_or_404(session_id).document
    filename = export_filename(document.title, "pptx")
    return Response(
        content=export_pptx(document),
        media_type=PPTX_MEDIA_TYPE,
        headers={"Content-Disposition": attachment_header(filename)},
    )
