"""
Template Routes
===============

API routes for editor sessions, template selection and canvas sizing.
"""

from fastapi import APIRouter, HTTPException
from typing import Optional, Dict, Any, List
from pydantic import BaseModel

from ..canvas.template_engine import NO_TEMPLATE, TemplateEngine
from ..config.canvas_presets import CanvasPreset, list_presets
from ..models.template_models import CanvasDimensions, Template

router = APIRouter(prefix="/api", tags=["templates"])

# Injected by server
session_manager = None


class SessionResponse(BaseModel):
    session_id: str
    message: str


class SelectTemplateRequest(BaseModel):
    """Template to load; ``null`` clears the editor."""
    template: Optional[Template] = None


def get_engine_or_404(session_id: str) -> TemplateEngine:
    if not session_manager:
        raise HTTPException(status_code=500, detail="Session manager not initialized")

    engine = session_manager.get_engine(session_id)
    if engine is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return engine


@router.post("/sessions")
async def create_session() -> SessionResponse:
    """Create a new editor session."""
    if not session_manager:
        raise HTTPException(status_code=500, detail="Session manager not initialized")

    session_id = session_manager.create_session()
    return SessionResponse(session_id=session_id, message="Session created")


@router.get("/sessions/{session_id}/state")
async def get_state(session_id: str) -> Dict[str, Any]:
    """Current template and selection."""
    return get_engine_or_404(session_id).snapshot().to_dict()


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str):
    if not session_manager:
        raise HTTPException(status_code=500, detail="Session manager not initialized")

    if not session_manager.close_session(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return {"message": "Session closed", "session_id": session_id}


@router.put("/sessions/{session_id}/template")
async def select_template(session_id: str, request: SelectTemplateRequest) -> Dict[str, Any]:
    """Load a template into the session (resets the selection)."""
    engine = get_engine_or_404(session_id)
    engine.select_template(request.template)
    return engine.snapshot().to_dict()


@router.put("/sessions/{session_id}/canvas")
async def set_canvas_dimensions(session_id: str, dimensions: CanvasDimensions) -> Dict[str, Any]:
    """Resize the canvas, scaling every element proportionally."""
    engine = get_engine_or_404(session_id)
    result = engine.set_canvas_dimensions(dimensions)
    if not result.applied:
        raise HTTPException(status_code=409, detail="No template selected")
    return engine.snapshot().to_dict()


@router.put("/sessions/{session_id}/canvas/preset/{preset_name:path}")
async def apply_preset(session_id: str, preset_name: str) -> Dict[str, Any]:
    """Resize the canvas to a named preset."""
    engine = get_engine_or_404(session_id)
    result = engine.apply_preset(preset_name)
    if not result.applied:
        if result.reason == NO_TEMPLATE:
            raise HTTPException(status_code=409, detail="No template selected")
        raise HTTPException(status_code=400, detail=f"Unknown preset: {preset_name}")
    return engine.snapshot().to_dict()


@router.post("/sessions/{session_id}/dev-mode/toggle")
async def toggle_development_pro_mode(session_id: str):
    engine = get_engine_or_404(session_id)
    active = engine.toggle_development_pro_mode()
    return {"session_id": session_id, "isDevelopmentProModeActive": active}


@router.get("/presets")
async def get_presets() -> List[CanvasPreset]:
    """Available canvas presets."""
    return list_presets()
