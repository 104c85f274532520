"""
Canvas Presets
==============

Social-media canvas sizes offered by the editors' size picker.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models.template_models import CanvasDimensions


CUSTOM_PRESET_NAME = "Custom Dimensions"


class CanvasPreset(BaseModel):
    """A named canvas size."""
    name: str
    width: int = Field(ge=0)
    height: int = Field(ge=0)
    aspect_ratio_label: str
    icon: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        # Custom is a placeholder whose size comes from the user.
        return self.width == 0 or self.height == 0

    @property
    def aspect_ratio(self) -> str:
        """Short ratio, e.g. ``"9:16"`` for ``"9:16 (Portrait)"``."""
        return self.aspect_ratio_label.split(" ")[0]

    def to_dimensions(self) -> CanvasDimensions:
        return CanvasDimensions(width=self.width, height=self.height)


CANVAS_PRESETS: List[CanvasPreset] = [
    CanvasPreset(name=CUSTOM_PRESET_NAME, width=0, height=0, aspect_ratio_label="Custom"),
    CanvasPreset(name="Instagram Post", width=1080, height=1080, aspect_ratio_label="1:1 (Square)"),
    CanvasPreset(name="Instagram Story / Reel", width=1080, height=1920, aspect_ratio_label="9:16 (Portrait)"),
    CanvasPreset(name="Instagram Landscape", width=1080, height=566, aspect_ratio_label="1.91:1 (Landscape)"),
    CanvasPreset(name="X (Twitter) Post Image", width=1600, height=900, aspect_ratio_label="16:9 (Landscape)"),
    CanvasPreset(name="X (Twitter) Profile Header", width=1500, height=500, aspect_ratio_label="3:1 (Landscape)"),
    CanvasPreset(name="Facebook Post (Square)", width=1080, height=1080, aspect_ratio_label="1:1 (Square)"),
    CanvasPreset(name="Facebook Post (Landscape)", width=1200, height=630, aspect_ratio_label="1.91:1 (Landscape)"),
    CanvasPreset(name="Facebook Story", width=1080, height=1920, aspect_ratio_label="9:16 (Portrait)"),
    CanvasPreset(name="LinkedIn Post (Landscape)", width=1200, height=627, aspect_ratio_label="1.91:1 (Landscape)"),
    CanvasPreset(name="LinkedIn Post (Square)", width=1080, height=1080, aspect_ratio_label="1:1 (Square)"),
    CanvasPreset(name="Pinterest Pin", width=1000, height=1500, aspect_ratio_label="2:3 (Portrait)"),
    CanvasPreset(name="YouTube Thumbnail", width=1280, height=720, aspect_ratio_label="16:9 (Landscape)"),
    CanvasPreset(name="Default Wide (16:9)", width=1920, height=1080, aspect_ratio_label="16:9"),
    CanvasPreset(name="Default Tall (9:16)", width=1080, height=1920, aspect_ratio_label="9:16"),
    CanvasPreset(name="Default Square (1:1)", width=1080, height=1080, aspect_ratio_label="1:1"),
]


def list_presets(include_custom: bool = True) -> List[CanvasPreset]:
    return [p for p in CANVAS_PRESETS if include_custom or not p.is_custom]


def get_preset(name: str) -> Optional[CanvasPreset]:
    """Look up a preset by its display name (case-insensitive)."""
    wanted = name.strip().lower()
    for preset in CANVAS_PRESETS:
        if preset.name.lower() == wanted:
            return preset
    return None
