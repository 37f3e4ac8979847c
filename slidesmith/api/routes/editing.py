"""Slide and element editing API endpoints.

Each endpoint applies one document operation to the session's present
document and records the result as a single undoable step.
"""
import logging
from typing import Any, Callable, Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from slidesmith.core.errors import DocumentOperationError
from slidesmith.models import PresentationDocument
from slidesmith.services.editor import operations

from .sessions import get_session_or_404

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/sessions/{session_id}", tags=["editing"])


class RenameRequest(BaseModel):
    """Request model for renaming a presentation."""
    title: str


class AddSlideRequest(BaseModel):
    """Request model for inserting a blank slide."""
    position: Optional[int] = Field(default=None, description="Display position; end of deck if omitted")


class MoveSlideRequest(BaseModel):
    """Request model for moving a slide."""
    position: int


class AddElementRequest(BaseModel):
    """Request model for adding an element with its type's default content."""
    type: str
    content: Optional[Union[str, list[str]]] = None


class UpdateContentRequest(BaseModel):
    """Request model for replacing an element's content."""
    content: Union[str, list[str]]


def _apply(
    session_id: str,
    operation: Callable[[PresentationDocument], PresentationDocument],
) -> dict[str, Any]:
    session = get_session_or_404(session_id)
    try:
        updated = operation(session.document)
    except DocumentOperationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    session.history.set(updated)
    return session.to_dict()


@router.put("/title")
async def rename(session_id: str, request: RenameRequest) -> dict[str, Any]:
    return _apply(session_id, lambda doc: operations.rename(doc, request.title))


@router.post("/slides")
async def add_slide(session_id: str, request: Optional[AddSlideRequest] = None) -> dict[str, Any]:
    position = request.position if request else None
    return _apply(session_id, lambda doc: operations.add_slide(doc, position=position))


@router.delete("/slides/{slide_id}")
async def remove_slide(session_id: str, slide_id: str) -> dict[str, Any]:
    return _apply(session_id, lambda doc: operations.remove_slide(doc, slide_id))


@router.post("/slides/{slide_id}/move")
async def move_slide(session_id: str, slide_id: str, request: MoveSlideRequest) -> dict[str, Any]:
    return _apply(session_id, lambda doc: operations.move_slide(doc, slide_id, request.position))


@router.post("/slides/{slide_id}/duplicate")
async def duplicate_slide(session_id: str, slide_id: str) -> dict[str, Any]:
    return _apply(session_id, lambda doc: operations.duplicate_slide(doc, slide_id))


@router.post("/slides/{slide_id}/elements")
async def add_element(session_id: str, slide_id: str, request: AddElementRequest) -> dict[str, Any]:
    """
    Add an element on top of a slide.

    Without ``content`` the element starts with its type's default content.
    """
    def operation(doc: PresentationDocument) -> PresentationDocument:
        overrides = {"content": request.content} if request.content is not None else {}
        try:
            element = operations.create_element(request.type, **overrides)
        except ValueError as e:
            raise DocumentOperationError(f"Invalid content for {request.type} element: {e}") from e
        return operations.add_element(doc, slide_id, element)

    return _apply(session_id, operation)


@router.put("/slides/{slide_id}/elements/{element_id}")
async def update_element(
    session_id: str,
    slide_id: str,
    element_id: str,
    request: UpdateContentRequest,
) -> dict[str, Any]:
    return _apply(
        session_id,
        lambda doc: operations.update_element_content(doc, slide_id, element_id, request.content),
    )


@router.delete("/slides/{slide_id}/elements/{element_id}")
async def remove_element(session_id: str, slide_id: str, element_id: str) -> dict[str, Any]:
    return _apply(session_id, lambda doc: operations.remove_element(doc, slide_id, element_id))
