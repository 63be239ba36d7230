"""Feature Store for Feature Styling

Partitioned, insertion-ordered storage of polygon and point features with
geometry-derived identifiers for features that arrive without one.
"""

from .feature_id import derive_feature_id, resolve_feature_id, flatten_coordinates
from .feature_store import FeatureStore

__all__ = [
    'FeatureStore',
    'derive_feature_id',
    'resolve_feature_id',
    'flatten_coordinates',
]
