"""Performance Monitoring for Feature Styling Passes

Wall time and resident-memory growth of each coloring pass, with a warning
when a pass exceeds the configured threshold.
"""

import logging
import time
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Optional

import psutil

logger = logging.getLogger(__name__)


@dataclass
class PassMetrics:
    """Measurements of one monitored pass."""
    operation_name: str
    duration: float
    feature_count: int
    memory_delta_mb: float
    
    @property
    def features_per_second(self) -> float:
        return self.feature_count / self.duration if self.duration > 0 else 0.0
    
    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["duration"] = round(self.duration, 4)
        data["memory_delta_mb"] = round(self.memory_delta_mb, 2)
        data["features_per_second"] = round(self.features_per_second, 1)
        return data


class PerformanceMonitor:
    """Keeps the history of monitored passes for status reporting."""
    
    def __init__(self, slow_operation_threshold: float = 5.0):
        """Initialize performance monitor.
        
        Args:
            slow_operation_threshold: Seconds after which a pass is logged as slow
        """
        self.slow_operation_threshold = slow_operation_threshold
        self.metrics_history: List[PassMetrics] = []
        self._process = psutil.Process()
    
    def _rss_mb(self) -> float:
        return self._process.memory_info().rss / (1024 * 1024)
    
    @contextmanager
    def monitor_operation(self, operation_name: str, feature_count: int = 0) -> Iterator[None]:
        """Measure the wrapped pass; metrics are kept even when it raises."""
        start_memory = self._rss_mb()
        start_time = time.perf_counter()
        
        try:
            yield
        finally:
            metrics = PassMetrics(
                operation_name=operation_name,
                duration=time.perf_counter() - start_time,
                feature_count=feature_count,
                memory_delta_mb=self._rss_mb() - start_memory,
            )
            self.metrics_history.append(metrics)
        
            if metrics.duration > self.slow_operation_threshold:
                logger.warning(f"Slow operation detected: {operation_name} took {metrics.duration:.2f}s "
                               f"for {feature_count} features")
            else:
                logger.debug(f"{operation_name}: {metrics.duration:.3f}s for {feature_count} features")
    
    def get_operation_metrics(self, operation_name: str) -> List[PassMetrics]:
        return [m for m in self.metrics_history if m.operation_name == operation_name]
    
    def last_metrics(self) -> Optional[PassMetrics]:
        return self.metrics_history[-1] if self.metrics_history else None
    
    def get_performance_summary(self) -> Dict[str, Any]:
        """Per-operation totals over the recorded history."""
        if not self.metrics_history:
            return {"message": "No performance data collected"}
        
        breakdown: Dict[str, Dict[str, Any]] = {}
        for metric in self.metrics_history:
            entry = breakdown.setdefault(metric.operation_name, {"passes": 0, "total_time": 0.0, "features": 0})
            entry["passes"] += 1
            entry["total_time"] += metric.duration
            entry["features"] += metric.feature_count
        
        return {
            "total_passes": len(self.metrics_history),
            "total_time": round(sum(m.duration for m in self.metrics_history), 3),
            "total_features": sum(m.feature_count for m in self.metrics_history),
            "slowest_pass": round(max(m.duration for m in self.metrics_history), 3),
            "operation_breakdown": breakdown,
        }
    
    def clear_metrics(self) -> None:
        self.metrics_history.clear()
        logger.debug("Performance metrics history cleared")
