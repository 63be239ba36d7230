"""Partitioned Feature Store

Holds the canonical polygon and point partitions keyed by stable identifiers.
Each partition is an insertion-ordered mapping of id to Feature, maintained
either by a full ``index`` or by incremental add/remove notifications that
mirror the external data source.
"""

import logging
from typing import Dict, Iterable, List, Optional, Union

from ..models import Feature, FeaturePartition
from .feature_id import derive_feature_id

logger = logging.getLogger(__name__)

PartitionKey = Union[FeaturePartition, str]


class FeatureStore:
    """Canonical id to Feature mappings for the polygon and point partitions.
    
    The store is not thread safe; callers serialize mutating operations
    (see FeatureStylingProcessor). No operation raises for unknown ids and no
    geometry validation happens here.
    """
    
    def __init__(self):
        self._partitions: Dict[FeaturePartition, Dict[str, Feature]] = {
            partition: {} for partition in FeaturePartition
        }
    
    def index(self, partition: PartitionKey, features: Iterable[Feature]) -> int:
        """Replace a partition's contents.
        
        Features lacking an id get a geometry-derived one written onto them.
        
        Args:
            partition: Partition to replace
            features: Features in source order
            
        Returns:
            Number of distinct ids now held by the partition
        """
        partition = FeaturePartition(partition)
        entries: Dict[str, Feature] = {}
        
        for feature in features:
            feature_id = self._assign_id(feature)
            if feature_id in entries and entries[feature_id] is not feature:
                logger.warning(f"Feature id collision in {partition.value}: {feature_id}")
            entries[feature_id] = feature
        
        self._partitions[partition] = entries
        logger.debug(f"Indexed {len(entries)} features into {partition.value}")
        return len(entries)
    
    def on_add(self, partition: PartitionKey, feature: Feature) -> str:
        """Mirror a 'feature added' notification; returns the feature's id."""
        partition = FeaturePartition(partition)
        feature_id = self._assign_id(feature)
        entries = self._partitions[partition]
        
        if feature_id in entries and entries[feature_id] is not feature:
            logger.warning(f"Feature id collision in {partition.value}: {feature_id}")
        entries[feature_id] = feature
        return feature_id
    
    def on_remove(self, partition: PartitionKey, feature_id: Optional[str]) -> Optional[Feature]:
        """Mirror a 'feature removed' notification; unknown ids are ignored."""
        if not feature_id:
            return None
        
        removed = self._partitions[FeaturePartition(partition)].pop(feature_id, None)
        if removed is None:
            logger.debug(f"Ignoring removal of unknown feature {feature_id}")
        return removed
    
    def get_all(self, partition: PartitionKey) -> List[Feature]:
        """All features of a partition in insertion order."""
        return list(self._partitions[FeaturePartition(partition)].values())
    
    def get_by_id(self, partition: PartitionKey, feature_id: Optional[str]) -> Optional[Feature]:
        if not feature_id:
            return None
        return self._partitions[FeaturePartition(partition)].get(feature_id)
    
    def get_all_polygons(self) -> List[Feature]:
        return self.get_all(FeaturePartition.POLYGONS)
    
    def get_all_points(self) -> List[Feature]:
        return self.get_all(FeaturePartition.POINTS)
    
    def count(self, partition: PartitionKey) -> int:
        return len(self._partitions[FeaturePartition(partition)])
    
    def clear(self) -> None:
        """Empty both partitions."""
        for entries in self._partitions.values():
            entries.clear()
        logger.debug("Feature store cleared")
    
    def _assign_id(self, feature: Feature) -> str:
        if not feature.id:
            feature.id = derive_feature_id(feature)
        return feature.id
