"""FeatureStylingProcessor Implementation

This module implements the FeatureStylingProcessor, the ModuleProcessor that
owns one feature store, one color cache, one colorer and one query engine and
gives them an explicit configure/load/process/reset lifecycle.
"""

import logging
import random
import threading
from contextlib import contextmanager, nullcontext
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Sequence

from pydantic import ValidationError

from src.config.config_loader import ConfigLoader
from src.exceptions import GeoStyleBaseException, GeoStyleProcessingError
from src.interfaces.module_processor import ModuleProcessor, ModuleState, ModuleStatus, ProcessingResult
from ..coloring import ColorCache, PolygonColorer, StyleFactory
from ..coloring.fingerprint import SourceText
from ..feature_store import FeatureStore
from ..models import ColoringConfig, Feature, FeaturePartition
from ..spatial_query import SpatialQueryEngine
from .performance_optimizations import PerformanceMonitor

logger = logging.getLogger(__name__)


class FeatureStylingProcessor(ModuleProcessor):
    """Feature styling module implementing the ModuleProcessor interface.
    
    Every public operation runs under one re-entrant lock guarding the
    store/cache pair, so a host may call the processor from several threads.
    The components themselves are not synchronized; code that bypasses the
    processor must use ``locked()``.
    """
    
    MODULE_NAME = "feature_styling"
    
    def __init__(self, config_loader: ConfigLoader, environment: str = "development",
                 rng: Optional[random.Random] = None):
        """Initialize the processor with shared configuration.
        
        Args:
            config_loader: ConfigLoader providing style and environment configuration
            environment: Environment whose configuration is used
            rng: Random source for the palette fallback; seeded from configuration when omitted
        """
        self.config_loader = config_loader
        self.environment = environment
        self._rng = rng
        self._lock = threading.RLock()
        self._last_run: Optional[datetime] = None
        self._last_error: Optional[str] = None
        self._configuration_valid: Optional[bool] = None
        self._raw_contents: List[SourceText] = []
        self._monitor_performance = True
        
        self.feature_store = FeatureStore()
        self.color_cache = ColorCache()
        self.coloring_config = ColoringConfig()
        self.colorer = PolygonColorer.from_config(
            self.feature_store, self.coloring_config, self.color_cache, rng=self._rng
        )
        self.queries = SpatialQueryEngine(self.feature_store)
        self.style_factory = StyleFactory()
        self.performance_monitor = PerformanceMonitor()
        
        logger.info(f"FeatureStylingProcessor initialized for environment: {environment}")
    
    def validate_configuration(self) -> bool:
        """Load and validate coloring, style and processing configuration.
        
        A valid configuration replaces the palette, so the color cache is
        reset and the next pass recolors every polygon.
        
        Returns:
            True if configuration is valid, False otherwise
        """
        with self._lock:
            try:
                coloring_config = ColoringConfig(**self.config_loader.get_coloring_settings(self.environment))
                style_factory = StyleFactory.from_style_config(self.config_loader.load_style_config())
                processing = self.config_loader.load_environment_config(self.environment).get("processing", {})
                monitor_performance = bool(processing.get("monitor_performance", True))
                slow_threshold = float(processing.get("slow_operation_threshold_seconds", 5.0))
            except (GeoStyleBaseException, ValidationError, KeyError, TypeError,
                    ValueError, AttributeError) as e:
                logger.error(f"Feature styling configuration invalid: {e}")
                self._configuration_valid = False
                return False
            
            self.coloring_config = coloring_config
            self.style_factory = style_factory
            self._monitor_performance = monitor_performance
            self.performance_monitor.slow_operation_threshold = slow_threshold
            
            self.color_cache.reset()
            self.colorer = PolygonColorer.from_config(
                self.feature_store, coloring_config, self.color_cache, rng=self._rng
            )
            self._configuration_valid = True
            
            logger.info(f"Configuration validated: palette of {len(coloring_config.palette)} colors")
            return True
    
    def load_sources(self, polygons: Sequence[Feature], points: Sequence[Feature],
                     raw_contents: Sequence[SourceText] = ()) -> None:
        """Replace both partitions and the raw source texts used for fingerprinting.
        
        Args:
            polygons: Polygon features from ingestion
            points: Point features from ingestion
            raw_contents: Raw geometry source texts, one per source file
        """
        with self._lock:
            polygon_count = self.feature_store.index(FeaturePartition.POLYGONS, polygons)
            point_count = self.feature_store.index(FeaturePartition.POINTS, points)
            self._raw_contents = list(raw_contents)
            logger.info(f"Loaded {polygon_count} polygons and {point_count} points "
                        f"from {len(self._raw_contents)} sources")
    
    def add_feature(self, partition: FeaturePartition, feature: Feature) -> str:
        with self._lock:
            return self.feature_store.on_add(partition, feature)
    
    def remove_feature(self, partition: FeaturePartition, feature_id: str) -> Optional[Feature]:
        with self._lock:
            return self.feature_store.on_remove(partition, feature_id)
    
    def process(self, dry_run: bool = False) -> ProcessingResult:
        """Run a coloring pass over the polygon partition.
        
        Args:
            dry_run: If True, compute colors without writing ``fillColor``
            
        Returns:
            ProcessingResult with coloring statistics in ``metadata``
        """
        with self._lock:
            start_time = datetime.now()
            
            if self._configuration_valid is False:
                return ProcessingResult(
                    success=False,
                    records_processed=0,
                    errors=["Configuration validation failed"],
                    metadata={"dry_run": dry_run},
                    execution_time=0.0
                )
            
            polygons = self.feature_store.get_all_polygons()
            monitor = (self.performance_monitor.monitor_operation("polygon_coloring", len(polygons))
                       if self._monitor_performance else nullcontext())
            
            try:
                with monitor:
                    colors = self._run_coloring_pass(polygons, dry_run)
            except GeoStyleBaseException as e:
                execution_time = (datetime.now() - start_time).total_seconds()
                self._last_error = str(e)
                logger.error(f"Feature styling pass failed after {execution_time:.3f}s: {e}")
                return ProcessingResult(
                    success=False,
                    records_processed=0,
                    errors=[str(e)],
                    metadata={"dry_run": dry_run},
                    execution_time=execution_time
                )
            
            execution_time = (datetime.now() - start_time).total_seconds()
            self._last_run = datetime.now()
            self._last_error = None
            
            coloring = self.colorer.last_result
            logger.info(coloring.get_summary())
            
            return ProcessingResult(
                success=True,
                records_processed=len(polygons),
                metadata={
                    "dry_run": dry_run,
                    "colors": colors,
                    "coloring": coloring.model_dump(mode="json"),
                    "point_count": self.feature_store.count(FeaturePartition.POINTS),
                },
                execution_time=execution_time
            )
    
    def _run_coloring_pass(self, polygons: List[Feature], dry_run: bool) -> Dict[str, str]:
        try:
            if dry_run:
                return self.colorer.calculate_polygon_colors(polygons, self._raw_contents)
            return self.colorer.apply_polygon_colors(polygons, self._raw_contents)
        except GeoStyleBaseException:
            raise
        except Exception as e:
            raise GeoStyleProcessingError(
                f"Polygon coloring failed: {e}",
                {"polygon_count": len(polygons), "dry_run": dry_run}
            ) from e
    
    def reset(self) -> None:
        """Clear the store, the color cache and recorded sources."""
        with self._lock:
            self.feature_store.clear()
            self.colorer.reset()
            self._raw_contents = []
            self._last_run = None
            self._last_error = None
            self.performance_monitor.clear_metrics()
            logger.info("Feature styling state reset")
    
    def get_status(self) -> ModuleStatus:
        with self._lock:
            if self._configuration_valid is False:
                state = ModuleState.DISABLED
            elif self._last_error:
                state = ModuleState.ERROR
            else:
                state = ModuleState.READY
            
            rebuilt_at = self.color_cache.rebuilt_at
            last_pass = self.performance_monitor.last_metrics()
            return ModuleStatus(
                module_name=self.MODULE_NAME,
                is_configured=self._configuration_valid is True,
                last_run=self._last_run,
                status=state,
                health_check=self._last_error is None,
                details={
                    "polygon_count": self.feature_store.count(FeaturePartition.POLYGONS),
                    "point_count": self.feature_store.count(FeaturePartition.POINTS),
                    "source_count": len(self._raw_contents),
                    "cached_colors": len(self.color_cache),
                    "cache_rebuilt_at": rebuilt_at.isoformat() if rebuilt_at else None,
                    "last_error": self._last_error,
                    "last_pass": last_pass.to_dict() if last_pass else None,
                }
            )
    
    @contextmanager
    def locked(self) -> Iterator[SpatialQueryEngine]:
        """Hold the processor lock while using the query engine directly."""
        with self._lock:
            yield self.queries
