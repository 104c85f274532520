"""
Canvas Layout
=============

Proportional re-layout of elements when the canvas is resized.

Positions and boxes scale per axis, so shapes stretch with the canvas. Font
sizes scale by the smaller of the two factors so text is never distorted.
Media with a ``contain``/``scale-down`` fit keeps its own aspect ratio.
"""

from pydantic import BaseModel, ConfigDict

from ..models.template_models import (
    ASPECT_PRESERVING_FITS,
    DEFAULT_FONT_SIZE,
    CanvasDimensions,
    CanvasElement,
    ObjectFit,
)


class ScaleFactors(BaseModel):
    """Per-axis scale plus the uniform content scale."""
    model_config = ConfigDict(frozen=True)

    scale_x: float
    scale_y: float
    content_scale: float


def compute_scale(old: CanvasDimensions, new: CanvasDimensions) -> ScaleFactors:
    scale_x = new.width / old.width
    scale_y = new.height / old.height
    return ScaleFactors(
        scale_x=scale_x,
        scale_y=scale_y,
        content_scale=min(scale_x, scale_y),
    )


def scale_element(element: CanvasElement, factors: ScaleFactors) -> CanvasElement:
    """Return a scaled copy of ``element``."""
    updates = {
        "x": element.x * factors.scale_x,
        "y": element.y * factors.scale_y,
        "width": element.width * factors.scale_x,
        "height": element.height * factors.scale_y,
    }

    if element.is_text_like:
        font_size = getattr(element, "fontSize", None) or DEFAULT_FONT_SIZE
        updates["fontSize"] = max(1.0, font_size * factors.content_scale)
    elif element.is_media:
        object_fit = getattr(element, "objectFit", None) or ObjectFit.COVER
        object_fit = getattr(object_fit, "value", object_fit)
        if object_fit in ASPECT_PRESERVING_FITS and element.width > 0 and element.height > 0:
            intrinsic_aspect_ratio = element.width / element.height
            updates["height"] = updates["width"] / intrinsic_aspect_ratio

    return element.model_copy(update=updates, deep=True)

