"""Feature Styling Processor

ModuleProcessor implementation owning the feature store, color cache,
colorer and query engine, plus performance monitoring of styling passes.
"""

from .feature_styling_processor import FeatureStylingProcessor
from .performance_optimizations import PassMetrics, PerformanceMonitor

__all__ = ['FeatureStylingProcessor', 'PerformanceMonitor', 'PassMetrics']
