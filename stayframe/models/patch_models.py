"""
Property Patch Models
=====================

Typed edit commands applied to a single canvas element.

Well-known properties get their own patch with a native value type and the
invariant it guarantees (e.g. opacity in [0, 1]). Everything else goes
through ``PassthroughPatch`` so variant-specific and future fields stay
editable.
"""

from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from .template_models import CanvasElement


class _BasePatch(BaseModel):
    """Common behaviour: replace one property on a copy of the element."""

    @property
    def property_name(self) -> str:
        raise NotImplementedError

    def apply(self, element: CanvasElement) -> CanvasElement:
        return element.model_copy(update={self.property_name: self.value}, deep=True)


class OpacityPatch(_BasePatch):
    kind: Literal["opacity"] = "opacity"
    value: float = Field(ge=0, le=1)

    @property
    def property_name(self) -> str:
        return "opacity"


class GeometryPatch(_BasePatch):
    kind: Literal["geometry"] = "geometry"
    target: Literal["x", "y", "width", "height"]
    value: float = Field(ge=0)

    @property
    def property_name(self) -> str:
        return self.target


class FontSizePatch(_BasePatch):
    kind: Literal["fontSize"] = "fontSize"
    value: float = Field(ge=1)

    @property
    def property_name(self) -> str:
        return "fontSize"


class SourcePatch(_BasePatch):
    kind: Literal["src"] = "src"
    value: Optional[str] = None

    @property
    def property_name(self) -> str:
        return "src"


class RotationPatch(_BasePatch):
    kind: Literal["rotation"] = "rotation"
    value: float

    @property
    def property_name(self) -> str:
        return "rotation"


class LineHeightPatch(_BasePatch):
    kind: Literal["lineHeight"] = "lineHeight"
    value: float = Field(ge=0.8, le=3)

    @property
    def property_name(self) -> str:
        return "lineHeight"


class LetterSpacingPatch(_BasePatch):
    kind: Literal["letterSpacing"] = "letterSpacing"
    value: float = Field(ge=-2, le=10)

    @property
    def property_name(self) -> str:
        return "letterSpacing"


class PassthroughPatch(_BasePatch):
    """Assigns the raw value verbatim."""
    kind: Literal["passthrough"] = "passthrough"
    target: str
    value: Any = None

    @property
    def property_name(self) -> str:
        return self.target


PropertyPatch = Annotated[
    Union[
        OpacityPatch,
        GeometryPatch,
        FontSizePatch,
        SourcePatch,
        RotationPatch,
        LineHeightPatch,
        LetterSpacingPatch,
        PassthroughPatch,
    ],
    Field(discriminator="kind"),
]
