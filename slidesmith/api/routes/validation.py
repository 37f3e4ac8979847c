"""Presentation validation API endpoint."""
import logging
from typing import Any

from fastapi import APIRouter, Body

from slidesmith.core import get_settings
from slidesmith.services import validate_presentation

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["validation"])


@router.post("/validate")
async def validate(data: Any = Body(...)) -> dict[str, Any]:
    """
    Check arbitrary JSON against the presentation schema.

    Always answers 200; the verdict is in the body as
    ``{"valid": bool, "error": str | null}`` with the first violation found.
    """
    result = validate_presentation(data, require_unique_ids=get_settings().require_unique_ids)
    if not result.valid:
        logger.debug(f"Validation rejected document: {result.error}")
    return result.model_dump()
