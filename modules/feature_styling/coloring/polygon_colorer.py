"""Adjacency-Aware Polygon Colorer

Assigns every polygon a fill color that differs from the colors of its
bounding-box neighbors, caching the result against fingerprints of the raw
source texts so recoloring only happens when the sources change.
"""

import logging
import random
from datetime import datetime
from typing import Dict, Optional, Sequence

from src.exceptions import GeoStyleGeometryError
from ..feature_store import FeatureStore, resolve_feature_id
from ..models import (
    ColoringConfig, ColoringResult, DEFAULT_FILL_COLOR, FILL_COLOR_PROPERTY, Feature
)
from .color_cache import ColorCache
from .extent_index import ExtentIndex
from .fingerprint import SourceText, fingerprint_sources
from .palette import Palette

logger = logging.getLogger(__name__)


class PolygonColorer:
    """Greedy, order-dependent polygon coloring with a fingerprinted cache.
    
    For each polygon without a cached color the colorer collects the colors
    already held by its bounding-box neighbors and takes the first palette
    color not among them. With a palette of P colors, a polygon with fewer
    than P colored neighbors always gets a color distinct from all of them.
    When the palette is exhausted a random color is used for that polygon
    only and is not cached, so a later pass may pick a different one.
    
    This is a heuristic, not a minimum coloring: iteration order decides
    which color each polygon gets.
    """
    
    def __init__(self, feature_store: FeatureStore,
                 color_cache: Optional[ColorCache] = None,
                 palette: Optional[Palette] = None,
                 rng: Optional[random.Random] = None,
                 default_fill_color: str = DEFAULT_FILL_COLOR):
        """Initialize the colorer.
        
        Args:
            feature_store: Store whose polygon partition is colored by default
            color_cache: Cache owned by the caller; a fresh one when omitted
            palette: Ordered palette; the default ten-color palette when omitted
            rng: Random source for the exhausted-palette fallback
            default_fill_color: Neutral color written for polygons without a color
        """
        self.feature_store = feature_store
        self.color_cache = color_cache if color_cache is not None else ColorCache()
        self.palette = palette or Palette()
        self.rng = rng or random.Random()
        self.default_fill_color = default_fill_color
        self.last_result: Optional[ColoringResult] = None
    
    @classmethod
    def from_config(cls, feature_store: FeatureStore, config: ColoringConfig,
                    color_cache: Optional[ColorCache] = None,
                    rng: Optional[random.Random] = None) -> "PolygonColorer":
        """Build a colorer from a validated ColoringConfig."""
        if rng is None:
            rng = random.Random(config.random_seed)
        return cls(
            feature_store,
            color_cache=color_cache,
            palette=Palette(config.palette, fallback_alpha=config.fallback_alpha),
            rng=rng,
            default_fill_color=config.default_fill_color,
        )
    
    def calculate_polygon_colors(self, features: Optional[Sequence[Feature]] = None,
                                 raw_contents: Sequence[SourceText] = ()) -> Dict[str, str]:
        """Compute a color for every polygon.
        
        Args:
            features: Polygons to color; the store's polygon partition when None
            raw_contents: Raw source texts, one per geometry source, used only
                for fingerprinting
                
        Returns:
            Mapping of feature id to color, in feature order
        """
        start_time = datetime.now()
        if features is None:
            features = self.feature_store.get_all_polygons()
        features = list(features)
        feature_ids = [resolve_feature_id(feature) for feature in features]
        
        fingerprints = fingerprint_sources(list(raw_contents))
        cache_valid = self.color_cache.is_valid_for(fingerprints)
        pruned_count = 0
        
        if cache_valid:
            pruned_count = self.color_cache.prune(feature_ids)
            if pruned_count:
                logger.debug(f"Pruned {pruned_count} cached colors of removed polygons")
        else:
            logger.info(f"Source content changed across {len(fingerprints)} sources, rebuilding polygon colors")
            self.color_cache.rebuild(fingerprints)
        
        extent_index = ExtentIndex([self._shape(feature) for feature in features])
        
        colors: Dict[str, str] = {}
        reused_count = assigned_count = fallback_count = 0
        
        for position, feature_id in enumerate(feature_ids):
            cached = self.color_cache.get(feature_id)
            if cached is not None:
                colors[feature_id] = cached
                reused_count += 1
                continue
            
            neighbor_colors = set()
            for neighbor in extent_index.neighbors(position):
                neighbor_color = self.color_cache.get(feature_ids[neighbor])
                if neighbor_color is not None:
                    neighbor_colors.add(neighbor_color)
            
            color = self.palette.first_available(neighbor_colors)
            if color is None:
                color = self.palette.random_color(self.rng)
                fallback_count += 1
                logger.warning(f"Palette exhausted for polygon {feature_id}, using random color {color}")
            else:
                self.color_cache.set(feature_id, color)
                assigned_count += 1
            
            colors[feature_id] = color
        
        self.last_result = ColoringResult(
            feature_count=len(features),
            cache_valid=cache_valid,
            pruned_count=pruned_count,
            assigned_count=assigned_count,
            fallback_count=fallback_count,
            reused_count=reused_count,
            rebuilt_at=self.color_cache.rebuilt_at,
            duration=(datetime.now() - start_time).total_seconds(),
        )
        logger.debug(self.last_result.get_summary())
        
        return colors
    
    def apply_polygon_colors(self, features: Optional[Sequence[Feature]] = None,
                             raw_contents: Sequence[SourceText] = ()) -> Dict[str, str]:
        """Compute colors and write them to each feature's ``fillColor`` property.
        
        Polygons left without a color get the neutral default fill.
        
        Returns:
            The mapping computed by calculate_polygon_colors
        """
        if features is None:
            features = self.feature_store.get_all_polygons()
        features = list(features)
        
        colors = self.calculate_polygon_colors(features, raw_contents)
        
        for feature in features:
            color = colors.get(resolve_feature_id(feature)) or self.default_fill_color
            feature.set(FILL_COLOR_PROPERTY, color)
        
        return colors
    
    def reset(self) -> None:
        """Clear the owned cache and the last pass statistics."""
        self.color_cache.reset()
        self.last_result = None
    
    def _shape(self, feature: Feature):
        try:
            return feature.to_shape()
        except GeoStyleGeometryError as e:
            logger.debug(f"Polygon {feature.id} has unusable geometry, treating it as isolated: {e}")
            return None
