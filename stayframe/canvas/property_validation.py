"""
Property Validation
===================

Turns raw ``(property_name, value)`` pairs coming from editor controls into
typed patches. Malformed input never raises: numeric properties fall back to
a safe default, and an unusable ``src`` keeps the previous one.
"""

import copy
import logging
import math
import re
from typing import Any, Optional

from ..models.patch_models import (
    FontSizePatch,
    GeometryPatch,
    LetterSpacingPatch,
    LineHeightPatch,
    OpacityPatch,
    PassthroughPatch,
    PropertyPatch,
    RotationPatch,
    SourcePatch,
)
from ..models.template_models import DEFAULT_FONT_SIZE, CanvasElement

logger = logging.getLogger(__name__)

GEOMETRY_PROPERTIES = ("x", "y", "width", "height")

DEFAULT_LINE_HEIGHT = 1.2
LINE_HEIGHT_RANGE = (0.8, 3.0)
LETTER_SPACING_RANGE = (-2.0, 10.0)

# Leading decimal literal or Infinity, the way form inputs like "12px" or " 3.5 " are read.
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float(value: Any) -> Optional[float]:
    """
    Parse a number from user input.

    Accepts ints, floats and strings with a leading decimal literal or
    ``Infinity``. Returns None for anything else, including booleans and NaN.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return None
        number = float(match.group(0))
    else:
        return None

    if math.isnan(number):
        return None
    return number


def coerce_float(value: Any, default: float) -> float:
    """Parsed number, or ``default`` when parsing fails or yields zero."""
    number = parse_float(value)
    if not number:
        if number is None:
            logger.debug(f"[VALIDATION] Could not parse {value!r}, using {default}")
        return default
    return number


def coerce_bounded(
    value: Any,
    default: float,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> float:
    """Coerce and clamp. An infinity past an open bound falls back to ``default``."""
    number = coerce_float(value, default)
    if math.isinf(number):
        open_side = upper if number > 0 else lower
        if open_side is None:
            return default
    return clamp(number, lower, upper)


def clamp(value: float, lower: Optional[float] = None, upper: Optional[float] = None) -> float:
    if lower is not None:
        value = max(lower, value)
    if upper is not None:
        value = min(upper, value)
    return value


def build_patch(element: CanvasElement, property_name: str, raw_value: Any) -> PropertyPatch:
    """Validate a raw value for ``property_name`` on ``element``."""
    if property_name == "opacity":
        return OpacityPatch(value=coerce_bounded(raw_value, 0.0, 0.0, 1.0))

    if property_name in GEOMETRY_PROPERTIES:
        return GeometryPatch(target=property_name, value=coerce_bounded(raw_value, 0.0, 0.0))

    if property_name == "rotation":
        return RotationPatch(value=coerce_bounded(raw_value, 0.0))

    if element.is_text_like:
        if property_name == "fontSize":
            return FontSizePatch(value=coerce_bounded(raw_value, DEFAULT_FONT_SIZE, 1.0))
        if property_name == "lineHeight":
            return LineHeightPatch(
                value=coerce_bounded(raw_value, DEFAULT_LINE_HEIGHT, *LINE_HEIGHT_RANGE)
            )
        if property_name == "letterSpacing":
            return LetterSpacingPatch(
                value=coerce_bounded(raw_value, 0.0, *LETTER_SPACING_RANGE)
            )

    if element.is_media and property_name == "src":
        if isinstance(raw_value, str) and raw_value:
            return SourcePatch(value=raw_value)
        logger.debug(f"[VALIDATION] Rejected src {raw_value!r} for element {element.id}")
        return SourcePatch(value=getattr(element, "src", None))

    return PassthroughPatch(target=property_name, value=copy.deepcopy(raw_value))
