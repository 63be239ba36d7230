"""Spatial Query Engine

Read-only containment, distance, nearest-neighbor, radius and area queries
over a FeatureStore. Every query is a snapshot of the store at call time and
returns the stored Feature instances themselves.

Distances and areas are planar, in whatever projected unit the coordinates
use; callers supply coordinates in a common projected reference frame.
"""

import logging
import math
from typing import List, Optional, Tuple

from shapely.geometry.base import BaseGeometry

from src.exceptions import GeoStyleGeometryError
from ..feature_store import FeatureStore
from ..models import Feature, FeaturePartition

logger = logging.getLogger(__name__)

Bounds = Tuple[float, float, float, float]


def _bounds_overlap(a: Bounds, b: Bounds) -> bool:
    return a[0] <= b[2] and b[0] <= a[2] and a[1] <= b[3] and b[1] <= a[3]


class SpatialQueryEngine:
    """Spatial queries over the polygon and point partitions of a store.
    
    Queries scan the partitions linearly. All candidate selection goes
    through ``_candidates`` so a persistent spatial index can replace the
    scan without changing any query's results or ordering.
    
    Features with empty or malformed geometry never raise: they are left out
    of containment results, have zero area and are infinitely far from
    everything.
    """
    
    def __init__(self, feature_store: FeatureStore):
        """Initialize the query engine.
        
        Args:
            feature_store: Store whose partitions are queried
        """
        self.feature_store = feature_store
    
    def markers_within_polygon(self, polygon: Feature) -> List[Feature]:
        """Point features lying inside or on the boundary of ``polygon``."""
        polygon_shape = self._polygon_shape(polygon)
        if polygon_shape is None:
            return []
        
        return [
            marker for marker, marker_shape in self._candidates(FeaturePartition.POINTS, polygon_shape.bounds)
            if polygon_shape.covers(marker_shape)
        ]
    
    def polygons_containing_marker(self, marker: Feature) -> List[Feature]:
        """Polygon features containing ``marker``, boundary inclusive."""
        marker_shape = self._point_shape(marker)
        if marker_shape is None:
            return []
        
        return [
            polygon for polygon, polygon_shape in self._candidates(FeaturePartition.POLYGONS, marker_shape.bounds)
            if polygon_shape.covers(marker_shape)
        ]
    
    def distance(self, marker_a: Feature, marker_b: Feature) -> float:
        """Planar Euclidean distance between two point features.
        
        Returns ``math.inf`` when either feature has no usable coordinate.
        """
        shape_a = self._point_shape(marker_a)
        shape_b = self._point_shape(marker_b)
        if shape_a is None or shape_b is None:
            return math.inf
        return math.hypot(shape_a.x - shape_b.x, shape_a.y - shape_b.y)
    
    def area(self, polygon: Feature) -> float:
        """Planar area of a polygon feature in squared projected units."""
        polygon_shape = self._polygon_shape(polygon)
        if polygon_shape is None:
            return 0.0
        return float(polygon_shape.area)
    
    def nearest_marker(self, marker: Feature) -> Optional[Feature]:
        """Closest other point feature; the first encountered wins ties.
        
        Returns None when the store holds fewer than two point features.
        """
        markers = self.feature_store.get_all_points()
        if len(markers) <= 1:
            return None
        
        nearest = None
        min_distance = math.inf
        for other in markers:
            if other is marker:
                continue
            
            distance = self.distance(marker, other)
            if distance < min_distance:
                min_distance = distance
                nearest = other
        
        return nearest
    
    def markers_within_distance(self, marker: Feature, radius: float) -> List[Feature]:
        """Other point features within ``radius`` (inclusive), in store order."""
        if radius < 0 or self._point_shape(marker) is None:
            return []
        
        within = []
        for other, _ in self._candidates(FeaturePartition.POINTS):
            if other is marker:
                continue
            # Unusable geometry is infinitely far, even for an infinite radius
            distance = self.distance(marker, other)
            if math.isfinite(distance) and distance <= radius:
                within.append(other)
        return within
    
    def _candidates(self, partition: FeaturePartition,
                    bounds: Optional[Bounds] = None) -> List[Tuple[Feature, BaseGeometry]]:
        """Features of a partition with usable geometry, in store order.
        
        When ``bounds`` is given only features whose bounding box overlaps it
        are returned; this is the seam where a spatial index plugs in.
        """
        candidates = []
        for feature in self.feature_store.get_all(partition):
            feature_shape = self._shape(feature)
            if feature_shape is None:
                continue
            if bounds is not None and not _bounds_overlap(bounds, feature_shape.bounds):
                continue
            candidates.append((feature, feature_shape))
        return candidates
    
    def _polygon_shape(self, feature: Feature) -> Optional[BaseGeometry]:
        if not feature.geometry.is_polygonal:
            return None
        return self._shape(feature)
    
    def _point_shape(self, feature: Feature) -> Optional[BaseGeometry]:
        if not feature.geometry.is_point:
            return None
        return self._shape(feature)
    
    def _shape(self, feature: Feature) -> Optional[BaseGeometry]:
        try:
            return feature.to_shape()
        except GeoStyleGeometryError as e:
            logger.debug(f"Skipping feature {feature.id} with unusable geometry: {e}")
            return None
