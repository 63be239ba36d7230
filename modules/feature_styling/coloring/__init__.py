"""Adjacency-Aware Coloring for Feature Styling

Greedy polygon coloring over bounding-box neighbors, a color cache
invalidated by source-content fingerprints, and renderer style factories.
"""

from .color_cache import ColorCache
from .extent_index import ExtentIndex
from .fingerprint import content_fingerprint, fingerprint_sources
from .palette import Palette
from .polygon_colorer import PolygonColorer
from .styles import CircleStyle, Fill, Stroke, Style, StyleFactory

__all__ = [
    'ColorCache',
    'ExtentIndex',
    'Palette',
    'PolygonColorer',
    'content_fingerprint',
    'fingerprint_sources',
    'Style',
    'Fill',
    'Stroke',
    'CircleStyle',
    'StyleFactory',
]
