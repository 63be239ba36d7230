"""Feature Styling Module

Geospatial feature indexing and styling engine: a partitioned feature store,
spatial queries over it, and adjacency-aware polygon coloring with a cache
invalidated by source-content fingerprints.
"""

from .models import Feature, FeatureGeometry, FeaturePartition, GeometryType
from .feature_store import FeatureStore
from .spatial_query import SpatialQueryEngine
from .coloring import ColorCache, Palette, PolygonColorer, StyleFactory
from .processor import FeatureStylingProcessor

__all__ = [
    'Feature',
    'FeatureGeometry',
    'FeaturePartition',
    'GeometryType',
    'FeatureStore',
    'SpatialQueryEngine',
    'ColorCache',
    'Palette',
    'PolygonColorer',
    'StyleFactory',
    'FeatureStylingProcessor',
]
