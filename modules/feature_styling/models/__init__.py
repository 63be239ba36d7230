"""Feature Styling Data Models

Pydantic data models for features, geometries, colorer configuration and
coloring statistics.
"""

from .feature import (
    Feature,
    FeatureGeometry,
    FeaturePartition,
    GeometryType,
    FILL_COLOR_PROPERTY,
    LABEL_PROPERTY,
)
from .coloring_models import ColoringConfig, ColoringResult, DEFAULT_PALETTE, DEFAULT_FILL_COLOR

__all__ = [
    'Feature',
    'FeatureGeometry',
    'FeaturePartition',
    'GeometryType',
    'FILL_COLOR_PROPERTY',
    'LABEL_PROPERTY',
    'ColoringConfig',
    'ColoringResult',
    'DEFAULT_PALETTE',
    'DEFAULT_FILL_COLOR',
]
