"""
Template Edit Engine
====================

Holds the template being edited and the current element selection, and
applies edits to them: property updates, deletion and canvas resizing.

The engine owns its document. Everything handed in is deep-copied and
everything handed out is a copy, so callers can never alias internal state.
Malformed input never raises: values are coerced, and unknown ids or a
missing template turn an operation into a no-op reported through
``EditResult.applied``.
"""

import logging
import threading
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ValidationError

from ..config.canvas_presets import get_preset
from ..models.patch_models import PropertyPatch
from ..models.template_models import (
    AnyCanvasElement,
    CanvasDimensions,
    CanvasElement,
    ElementType,
    Template,
    parse_element,
)
from .layout import compute_scale, scale_element
from .property_validation import build_patch

logger = logging.getLogger(__name__)

# No-op reasons
NO_TEMPLATE = "no template loaded"
ELEMENT_NOT_FOUND = "element not found"
IMMUTABLE_PROPERTY = "property is immutable"
INVALID_DIMENSIONS = "invalid canvas dimensions"
INVALID_VALUE = "invalid value"
UNKNOWN_PRESET = "unknown canvas preset"

IMMUTABLE_PROPERTIES = frozenset({"id", "type"})


class EditResult(BaseModel):
    """Outcome of a mutating call. ``applied`` is False for no-ops."""
    applied: bool
    reason: Optional[str] = None


class EngineSnapshot(BaseModel):
    """Observable engine state."""
    template: Optional[Template] = None
    selectedElementId: Optional[str] = None
    selectedElement: Optional[AnyCanvasElement] = None
    isDevelopmentProModeActive: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "template": self.template.to_dict() if self.template else None,
            "selectedElementId": self.selectedElementId,
            "selectedElement": self.selectedElement.to_dict() if self.selectedElement else None,
            "isDevelopmentProModeActive": self.isDevelopmentProModeActive,
        }


Listener = Callable[[EngineSnapshot], None]


class TemplateEngine:
    """
    Edit session for a single template.

    Usage:
        engine = TemplateEngine()
        engine.select_template(template)
        engine.update_element_property("headline", "fontSize", "32")
        engine.set_canvas_dimensions(CanvasDimensions(width=1080, height=1920))
        template = engine.current_template
    """

    def __init__(self):
        self._template: Optional[Template] = None
        self._selected_element_id: Optional[str] = None
        self._selected_element: Optional[CanvasElement] = None
        self._development_pro_mode = False
        self._listeners: List[Listener] = []
        # Every mutation reads then rewrites the whole document.
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current_template(self) -> Optional[Template]:
        with self._lock:
            return self._template.clone() if self._template else None

    @property
    def selected_element_id(self) -> Optional[str]:
        return self._selected_element_id

    @property
    def selected_element(self) -> Optional[CanvasElement]:
        with self._lock:
            return self._selected_element.clone() if self._selected_element else None

    @property
    def is_development_pro_mode_active(self) -> bool:
        return self._development_pro_mode

    @property
    def has_template(self) -> bool:
        return self._template is not None

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            return EngineSnapshot(
                template=self.current_template,
                selectedElementId=self._selected_element_id,
                selectedElement=self.selected_element,
                isDevelopmentProModeActive=self._development_pro_mode,
            )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_template(self, template: Union[Template, Dict[str, Any], None]) -> EditResult:
        """Load a private copy of ``template`` (or clear it) and reset selection."""
        if isinstance(template, dict):
            template = Template.from_dict(template)

        with self._lock:
            self._commit(
                template=template.clone() if template else None,
                selected_element_id=None,
                selected_element=None,
            )
        logger.info(
            f"[TEMPLATE-ENGINE] Selected template {template.id if template else None}"
        )
        return EditResult(applied=True)

    def select_element(self, element: Union[CanvasElement, Dict[str, Any], None]) -> EditResult:
        """
        Select ``element``.

        The caller is responsible for passing an element of the current
        template; membership is not checked.
        """
        if isinstance(element, dict):
            element = parse_element(element)

        with self._lock:
            self._commit(
                template=self._template,
                selected_element_id=element.id if element else None,
                selected_element=element.clone() if element else None,
            )
        return EditResult(applied=True)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def update_element_property(self, element_id: str, property_name: str, value: Any) -> EditResult:
        """Set one property on an element after validating the raw value."""
        with self._lock:
            if self._template is None:
                return self._noop(NO_TEMPLATE, element_id)

            element = self._template.get_element(element_id)
            if element is None:
                return self._noop(ELEMENT_NOT_FOUND, element_id)

            patch = build_patch(element, property_name, value)
            return self.apply_patch(element_id, patch)

    def apply_patch(self, element_id: str, patch: PropertyPatch) -> EditResult:
        """Apply an already validated patch to an element."""
        with self._lock:
            if self._template is None:
                return self._noop(NO_TEMPLATE, element_id)

            index = self._template.index_of(element_id)
            if index is None:
                return self._noop(ELEMENT_NOT_FOUND, element_id)

            element = self._template.elements[index]
            if self._is_immutable(element, patch.property_name):
                return self._noop(IMMUTABLE_PROPERTY, element_id)

            try:
                # Declared fields must keep their types so the template reloads.
                updated = parse_element(patch.apply(element).model_dump())
            except ValidationError as e:
                logger.debug(f"[TEMPLATE-ENGINE] Rejected {patch.property_name} for {element_id}: {e}")
                return self._noop(INVALID_VALUE, element_id)

            template = self._template.clone()
            template.elements[index] = updated

            selected_id = self._selected_element_id
            selected = self._selected_element
            if selected_id == element_id:
                selected = updated.clone()

            self._commit(template, selected_id, selected)
            logger.debug(
                f"[TEMPLATE-ENGINE] {element_id}.{patch.property_name} = {getattr(patch, 'value', None)!r}"
            )
            return EditResult(applied=True)

    def delete_element(self, element_id: str) -> EditResult:
        """Remove an element. Lock flags are not enforced here."""
        with self._lock:
            if self._template is None:
                return self._noop(NO_TEMPLATE, element_id)

            if self._template.index_of(element_id) is None:
                return self._noop(ELEMENT_NOT_FOUND, element_id)

            template = self._template.clone()
            template.elements = [e for e in template.elements if e.id != element_id]

            selected_id = self._selected_element_id
            selected = self._selected_element
            if selected_id == element_id:
                selected_id = None
            if selected is not None and selected.id == element_id:
                selected = None

            self._commit(template, selected_id, selected)
            logger.info(f"[TEMPLATE-ENGINE] Deleted element {element_id}")
            return EditResult(applied=True)

    def set_canvas_dimensions(
        self,
        dimensions: Union[CanvasDimensions, Dict[str, Any]],
    ) -> EditResult:
        """
        Resize the canvas and re-lay out every element proportionally.

        Scaling starts from the current geometry, so successive resizes
        compose multiplicatively.
        """
        return self._resize(dimensions)

    def apply_preset(self, preset_name: str) -> EditResult:
        """Resize to a named canvas preset and adopt its aspect ratio label."""
        preset = get_preset(preset_name)
        if preset is None or preset.is_custom:
            return self._noop(UNKNOWN_PRESET, preset_name)
        return self._resize(preset.to_dimensions(), aspect_ratio=preset.aspect_ratio)

    def toggle_development_pro_mode(self) -> bool:
        with self._lock:
            self._development_pro_mode = not self._development_pro_mode
            self._notify()
            return self._development_pro_mode

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resize(
        self,
        dimensions: Union[CanvasDimensions, Dict[str, Any]],
        aspect_ratio: Optional[str] = None,
    ) -> EditResult:
        if isinstance(dimensions, dict):
            try:
                dimensions = CanvasDimensions.model_validate(dimensions)
            except ValidationError as e:
                logger.warning(f"[TEMPLATE-ENGINE] Rejected canvas dimensions: {e}")
                return self._noop(INVALID_DIMENSIONS)

        with self._lock:
            if self._template is None:
                return self._noop(NO_TEMPLATE)

            old = self._template.canvasDimensions
            factors = compute_scale(old, dimensions)

            template = self._template.clone()
            template.canvasDimensions = dimensions.model_copy(deep=True)
            template.elements = [scale_element(e, factors) for e in self._template.elements]
            if aspect_ratio:
                template.aspectRatio = aspect_ratio

            selected = self._selected_element
            if self._selected_element_id is not None:
                match = template.get_element(self._selected_element_id)
                if match is not None:
                    selected = match.clone()

            self._commit(template, self._selected_element_id, selected)
            logger.info(
                f"[TEMPLATE-ENGINE] Canvas {old.width}x{old.height} -> "
                f"{dimensions.width}x{dimensions.height} "
                f"(scale_x={factors.scale_x:.4f}, scale_y={factors.scale_y:.4f}, "
                f"content_scale={factors.content_scale:.4f})"
            )
            return EditResult(applied=True)

    @staticmethod
    def _is_immutable(element: CanvasElement, property_name: str) -> bool:
        if property_name in IMMUTABLE_PROPERTIES:
            return True
        # Watermarks keep their fixed name.
        return element.type == ElementType.WATERMARK.value and property_name == "name"

    def _commit(
        self,
        template: Optional[Template],
        selected_element_id: Optional[str],
        selected_element: Optional[CanvasElement],
    ) -> None:
        """Swap in the new state in one step, then notify listeners."""
        self._template = template
        self._selected_element_id = selected_element_id
        self._selected_element = selected_element
        self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("[TEMPLATE-ENGINE] Change listener failed")

    def _noop(self, reason: str, target: Optional[str] = None) -> EditResult:
        logger.debug(f"[TEMPLATE-ENGINE] No-op ({reason}) target={target}")
        return EditResult(applied=False, reason=reason)
