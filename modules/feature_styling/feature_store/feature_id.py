"""Geometry-derived feature identifiers.

Features that arrive without an identifier are keyed on their geometry type
and flattened coordinates, e.g. ``Point_5,5``. Two distinct features with
identical coordinates therefore share an id.
"""

import math
from decimal import Decimal
from typing import Any, List

from ..models import Feature

# Floats in [1e-6, 1e21) are written positionally, others in exponent form
_MIN_POSITIONAL = 1e-6
_MAX_POSITIONAL = 1e21


def flatten_coordinates(coordinates: Any) -> List[Any]:
    """Flatten arbitrarily nested coordinate sequences in order."""
    if not isinstance(coordinates, (list, tuple)):
        return [coordinates]
    
    flat: List[Any] = []
    for item in coordinates:
        flat.extend(flatten_coordinates(item))
    return flat


def format_coordinate(value: Any) -> str:
    """Render one coordinate value for a derived id.
    
    Floats use their shortest round-trip digits: integral values drop the
    fraction (``5``, ``123456789012345680000``), values in [1e-6, 1e21)
    are positional, and the rest use an unpadded exponent (``1e-7``,
    ``1e+21``). Non-float values are rendered with ``str``.
    """
    if not isinstance(value, float):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    
    if _MIN_POSITIONAL <= abs(value) < _MAX_POSITIONAL:
        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    
    mantissa, exponent = repr(value).split("e")
    exponent = int(exponent)
    sign = "+" if exponent > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent)}"


def derive_feature_id(feature: Feature) -> str:
    """Derive the deterministic id ``<type>_<c1>,<c2>,...`` for a feature."""
    coordinates = flatten_coordinates(feature.geometry.coordinates)
    joined = ",".join(format_coordinate(value) for value in coordinates)
    return f"{feature.geometry.type.value}_{joined}"


def resolve_feature_id(feature: Feature) -> str:
    """Return the feature's own id, or the derived one when it has none."""
    return feature.id or derive_feature_id(feature)
