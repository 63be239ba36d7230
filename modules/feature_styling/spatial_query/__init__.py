"""Spatial Query Engine for Feature Styling

Containment, distance, nearest-neighbor, radius and area queries over the
feature store partitions.
"""

from .spatial_query_engine import SpatialQueryEngine

__all__ = ['SpatialQueryEngine']
