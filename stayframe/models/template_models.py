"""
Template Models for StayFrame
==============================

Typed document model for canvas templates: canvas dimensions plus a flat,
ordered list of text, image, video, shape, audio and watermark elements.

Field names follow the JSON schema used by the editors (camelCase), so a
template dict loaded from a catalog or a save action maps 1:1 onto these
models.
"""

from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, model_validator


WATERMARK_NAME = "Watermark"
WATERMARK_CONTENT = "Powered by StayFrame.fyi"
DEFAULT_FONT_SIZE = 16.0

TEXT_DECORATION_NONE = "none"
TEXT_DECORATION_FLAGS = ("underline", "line-through")


class ElementType(str, Enum):
    """Discriminant of a canvas element."""
    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    SHAPE = "shape"
    AUDIO = "audio"
    WATERMARK = "watermark"


class ObjectFit(str, Enum):
    """How media content fills its bounding box."""
    COVER = "cover"
    CONTAIN = "contain"
    FILL = "fill"
    NONE = "none"
    SCALE_DOWN = "scale-down"


class TemplateType(str, Enum):
    STATIC = "static"
    ANIMATED = "animated"


class AppType(str, Enum):
    QUOTE = "quote"
    MEME = "meme"
    REEL = "reel"


TEXT_LIKE_TYPES = frozenset({ElementType.TEXT.value, ElementType.WATERMARK.value})
MEDIA_TYPES = frozenset({ElementType.IMAGE.value, ElementType.VIDEO.value})
ASPECT_PRESERVING_FITS = frozenset({ObjectFit.CONTAIN.value, ObjectFit.SCALE_DOWN.value})


class CanvasDimensions(BaseModel):
    """Canvas size in pixels. Origin is the top-left corner."""
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    rotation: Optional[float] = None


class CanvasElement(BaseModel):
    """Fields shared by every element placed on the canvas."""

    # Unknown keys are kept so forward-compatible properties survive a round trip.
    model_config = ConfigDict(extra="allow", use_enum_values=True)

    id: str
    name: str
    type: str
    x: float = Field(default=0, ge=0)
    y: float = Field(default=0, ge=0)
    width: float = Field(default=0, ge=0)
    height: float = Field(default=0, ge=0)
    rotation: float = 0
    opacity: float = Field(default=1, ge=0, le=1)
    locked: bool = False
    zIndex: Optional[int] = None

    @property
    def is_text_like(self) -> bool:
        return self.type in TEXT_LIKE_TYPES

    @property
    def is_media(self) -> bool:
        return self.type in MEDIA_TYPES

    def clone(self):
        """Deep copy with no shared mutable state."""
        return self.model_copy(deep=True)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class TextElementProperties(BaseModel):
    """Typography shared by text and watermark elements."""
    content: str = ""
    fontFamily: str = "Arial, sans-serif"
    fontSize: float = Field(default=DEFAULT_FONT_SIZE, ge=1)
    fontWeight: Optional[str] = None
    fontStyle: Optional[str] = None
    color: str = "#000000"
    textAlign: Optional[str] = None
    lineHeight: Optional[float] = Field(default=None, ge=0.8, le=3)
    letterSpacing: Optional[float] = Field(default=None, ge=-2, le=10)
    textTransform: Optional[str] = None
    textDecoration: Optional[str] = None
    textShadow: Optional[str] = None


class TextCanvasElement(CanvasElement, TextElementProperties):
    type: Literal["text"] = "text"


class WatermarkCanvasElement(CanvasElement, TextElementProperties):
    """Branding overlay. Structurally a text element with a fixed name."""
    type: Literal["watermark"] = "watermark"
    name: Literal["Watermark"] = WATERMARK_NAME
    locked: bool = True


class ImageCanvasElement(CanvasElement):
    type: Literal["image"] = "image"
    src: Optional[str] = None
    objectFit: Optional[ObjectFit] = ObjectFit.COVER


class VideoCanvasElement(CanvasElement):
    type: Literal["video"] = "video"
    src: Optional[str] = None
    objectFit: Optional[ObjectFit] = ObjectFit.COVER
    startTime: Optional[float] = Field(default=None, ge=0)
    endTime: Optional[float] = Field(default=None, ge=0)
    volume: Optional[float] = Field(default=None, ge=0, le=1)
    autoplay: Optional[bool] = None
    loop: Optional[bool] = None
    controls: Optional[bool] = None
    muted: Optional[bool] = None


class ShapeProperties(BaseModel):
    model_config = ConfigDict(extra="allow")

    shapeType: str = "rectangle"
    fillColor: Optional[str] = None
    strokeColor: Optional[str] = None
    strokeWidth: Optional[float] = Field(default=None, ge=0)
    cornerRadius: Optional[float] = Field(default=None, ge=0)


class ShapeCanvasElement(CanvasElement):
    type: Literal["shape"] = "shape"
    props: Optional[ShapeProperties] = None


class AudioCanvasElement(CanvasElement):
    type: Literal["audio"] = "audio"
    src: Optional[str] = None
    volume: Optional[float] = Field(default=None, ge=0, le=1)
    loop: Optional[bool] = None


AnyCanvasElement = Annotated[
    Union[
        TextCanvasElement,
        ImageCanvasElement,
        VideoCanvasElement,
        ShapeCanvasElement,
        AudioCanvasElement,
        WatermarkCanvasElement,
    ],
    Field(discriminator="type"),
]

element_adapter = TypeAdapter(AnyCanvasElement)


def parse_element(data: Dict[str, Any]) -> CanvasElement:
    """Validate a raw element dict into its typed variant."""
    return element_adapter.validate_python(data)


class TemplateFeatures(BaseModel):
    """Capability flags consulted by editors. Not enforced by the engine."""
    model_config = ConfigDict(extra="allow")

    supportsText: bool = True
    maxTextElements: int = Field(default=1, ge=0)
    supportsImages: Optional[bool] = None
    supportsVideos: Optional[bool] = None


class Template(BaseModel):
    """A saved design: canvas dimensions plus an ordered list of elements."""

    model_config = ConfigDict(extra="allow", use_enum_values=True)

    id: str
    name: str
    type: TemplateType = TemplateType.STATIC
    appType: AppType
    category: str
    aspectRatio: str
    canvasDimensions: CanvasDimensions
    canvasBackgroundColor: Optional[str] = None
    elements: List[AnyCanvasElement] = Field(default_factory=list)
    features: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    previewImageUrl: Optional[str] = None
    createdBy: str = "system"
    version: int = 1
    description: Optional[str] = None
    lastModified: Optional[str] = None
    supportedFeatures: TemplateFeatures = Field(default_factory=TemplateFeatures)

    @model_validator(mode="after")
    def _check_unique_element_ids(self) -> "Template":
        seen = set()
        for element in self.elements:
            if element.id in seen:
                raise ValueError(f"Duplicate element id: {element.id}")
            seen.add(element.id)
        return self

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Template":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        """Canonical JSON-compatible tree of dicts and lists."""
        return self.model_dump(mode="json", exclude_none=True)

    def clone(self) -> "Template":
        return self.model_copy(deep=True)

    def get_element(self, element_id: str) -> Optional[CanvasElement]:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def index_of(self, element_id: str) -> Optional[int]:
        for index, element in enumerate(self.elements):
            if element.id == element_id:
                return index
        return None


def make_watermark(
    element_id: str,
    canvas: CanvasDimensions,
    content: str = WATERMARK_CONTENT,
    width: float = 400,
    height: float = 40,
    margin: float = 20,
) -> WatermarkCanvasElement:
    """Standard locked watermark anchored to the bottom-right of the canvas."""
    return WatermarkCanvasElement(
        id=element_id,
        content=content,
        x=max(0.0, canvas.width - width - margin),
        y=max(0.0, canvas.height - height - margin),
        width=width,
        height=height,
        fontFamily="Arial, sans-serif",
        fontSize=24,
        fontWeight="bold",
        color="rgba(0, 0, 0, 0.8)",
        textShadow="1px 1px 2px rgba(255, 255, 255, 0.8)",
        opacity=0.9,
        rotation=0,
        textAlign="right",
        locked=True,
    )


def toggle_text_decoration(current: Optional[str], flag: str) -> str:
    """
    Add or remove an ``underline`` / ``line-through`` flag.

    Decorations are stored as a space-joined string; an empty result is
    normalized to ``"none"``.
    """
    if flag not in TEXT_DECORATION_FLAGS:
        raise ValueError(f"Unknown text decoration: {flag}")

    flags = [
        part for part in (current or "").split()
        if part in TEXT_DECORATION_FLAGS
    ]
    if flag in flags:
        flags.remove(flag)
    else:
        flags.append(flag)
    return " ".join(flags) if flags else TEXT_DECORATION_NONE
