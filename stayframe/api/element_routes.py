"""
Element Routes
===============

API routes for selecting, editing and deleting canvas elements.
"""

from fastapi import APIRouter, HTTPException
from typing import Any, Dict, Optional
from pydantic import BaseModel

from ..canvas.template_engine import ELEMENT_NOT_FOUND, IMMUTABLE_PROPERTY, NO_TEMPLATE, EditResult
from .template_routes import get_engine_or_404

router = APIRouter(prefix="/api/sessions/{session_id}", tags=["elements"])


class SelectElementRequest(BaseModel):
    """Element to select; ``null`` clears the selection."""
    element_id: Optional[str] = None


class UpdatePropertyRequest(BaseModel):
    """Raw value from an inspector control."""
    property: str
    value: Any = None


def _raise_for_noop(result: EditResult, element_id: str) -> None:
    if result.applied:
        return
    if result.reason == NO_TEMPLATE:
        raise HTTPException(status_code=409, detail="No template selected")
    if result.reason == ELEMENT_NOT_FOUND:
        raise HTTPException(status_code=404, detail=f"Element not found: {element_id}")
    if result.reason == IMMUTABLE_PROPERTY:
        raise HTTPException(status_code=400, detail="Property cannot be changed")
    raise HTTPException(status_code=400, detail=result.reason or "Edit rejected")


@router.put("/selection")
async def select_element(session_id: str, request: SelectElementRequest) -> Dict[str, Any]:
    """Select an element of the current template, or clear the selection."""
    engine = get_engine_or_404(session_id)

    element = None
    if request.element_id is not None:
        template = engine.current_template
        element = template.get_element(request.element_id) if template else None
        if element is None:
            raise HTTPException(status_code=404, detail=f"Element not found: {request.element_id}")

    engine.select_element(element)
    return engine.snapshot().to_dict()


@router.patch("/elements/{element_id}")
async def update_element_property(
    session_id: str,
    element_id: str,
    request: UpdatePropertyRequest,
) -> Dict[str, Any]:
    """Set one property; numeric values are coerced and clamped."""
    engine = get_engine_or_404(session_id)
    result = engine.update_element_property(element_id, request.property, request.value)
    _raise_for_noop(result, element_id)
    return {"applied": True, "state": engine.snapshot().to_dict()}


@router.delete("/elements/{element_id}")
async def delete_element(session_id: str, element_id: str) -> Dict[str, Any]:
    """Remove an element from the current template."""
    engine = get_engine_or_404(session_id)
    result = engine.delete_element(element_id)
    _raise_for_noop(result, element_id)
    return {"message": "Element removed", "element_id": element_id, "state": engine.snapshot().to_dict()}
