"""
Observability metrics collection for PaletteKit.

Records operation timings, errors and named events (such as the palette
generator falling back to random colors, or an image producing no colors)
so callers can diagnose recovered conditions that are not raised.
"""

import time
import psutil
from typing import Dict, Any, Optional, List
from functools import wraps
from dataclasses import dataclass, asdict
from contextlib import contextmanager
import threading
from collections import defaultdict, deque
import numpy as np
from loguru import logger

from palettekit.config import config


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single operation."""
    operation_name: str
    duration_ms: float
    memory_usage_mb: float
    item_count: int
    timestamp: float
    error: Optional[str] = None


class MetricsCollector:
    """Thread-safe metrics collector for palette operations."""

    def __init__(self, max_history: int = 1000):
        self.max_history = max_history
        self._lock = threading.Lock()
        self._metrics_history: deque = deque(maxlen=max_history)
        self._operation_counts = defaultdict(int)
        self._error_counts = defaultdict(int)
        self._event_counts = defaultdict(int)
        self._durations = defaultdict(list)

    def record_performance(self, metrics: PerformanceMetrics) -> None:
        """Record performance metrics for an operation."""
        with self._lock:
            self._metrics_history.append(metrics)
            self._operation_counts[metrics.operation_name] += 1

            if metrics.error:
                self._error_counts[metrics.operation_name] += 1

            durations = self._durations[metrics.operation_name]
            durations.append(metrics.duration_ms)

            # Keep only recent stats to prevent memory growth
            if len(durations) > 100:
                durations.pop(0)

    def record_event(self, event_name: str) -> None:
        """Increment a named event counter."""
        with self._lock:
            self._event_counts[event_name] += 1

    def get_event_count(self, event_name: str) -> int:
        with self._lock:
            return self._event_counts.get(event_name, 0)

    def get_operation_stats(self, operation_name: str) -> Dict[str, Any]:
        """Get aggregated statistics for a specific operation."""
        with self._lock:
            durations = self._durations.get(operation_name)
            if not durations:
                return {}

            calls = self._operation_counts[operation_name]
            errors = self._error_counts[operation_name]
            return {
                'operation_name': operation_name,
                'total_calls': calls,
                'error_count': errors,
                'error_rate': errors / max(1, calls),
                'duration_stats': {
                    'mean_ms': float(np.mean(durations)),
                    'median_ms': float(np.median(durations)),
                    'p95_ms': float(np.percentile(durations, 95)),
                    'min_ms': float(np.min(durations)),
                    'max_ms': float(np.max(durations))
                }
            }

    def get_all_stats(self) -> Dict[str, Any]:
        """Get aggregated statistics for all operations and events."""
        with self._lock:
            operation_names = list(self._operation_counts.keys())
            events = dict(self._event_counts)
            total_ops = sum(self._operation_counts.values())
            total_errors = sum(self._error_counts.values())

        return {
            'operations': {name: self.get_operation_stats(name) for name in operation_names},
            'events': events,
            'total_operations': total_ops,
            'total_errors': total_errors,
            'overall_error_rate': total_errors / max(1, total_ops)
        }

    def get_recent_metrics(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Get the most recent performance metrics."""
        with self._lock:
            recent = list(self._metrics_history)[-limit:]
            return [asdict(metric) for metric in recent]

    def reset(self) -> None:
        """Clear all recorded metrics."""
        with self._lock:
            self._metrics_history.clear()
            self._operation_counts.clear()
            self._error_counts.clear()
            self._event_counts.clear()
            self._durations.clear()


# Global metrics collector instance
_metrics_collector = MetricsCollector()


def get_metrics_collector() -> MetricsCollector:
    """Get the global metrics collector instance."""
    return _metrics_collector


def reset_metrics() -> None:
    """Reset the global metrics collector."""
    _metrics_collector.reset()


def record_event(event_name: str) -> None:
    """Record a named event on the global collector."""
    if config.METRICS_ENABLED:
        _metrics_collector.record_event(event_name)


def _rss_mb() -> float:
    return psutil.Process().memory_info().rss / 1024 / 1024


@contextmanager
def performance_monitor(operation_name: str, item_count: int = 0):
    """Context manager for monitoring performance of operations."""
    if not config.METRICS_ENABLED:
        yield
        return

    start_time = time.time()
    start_memory = _rss_mb()
    error_msg = None

    try:
        yield
    except Exception as e:
        error_msg = str(e)
        raise
    finally:
        end_time = time.time()

        metrics = PerformanceMetrics(
            operation_name=operation_name,
            duration_ms=(end_time - start_time) * 1000,
            memory_usage_mb=max(_rss_mb(), start_memory),
            item_count=item_count,
            timestamp=end_time,
            error=error_msg
        )

        _metrics_collector.record_performance(metrics)

        if error_msg:
            logger.error(f"Operation {operation_name} failed after {metrics.duration_ms:.1f}ms: {error_msg}")
        else:
            logger.debug(f"Operation {operation_name} completed in {metrics.duration_ms:.1f}ms "
                         f"(memory: {metrics.memory_usage_mb:.1f}MB)")


def performance_tracked(operation_name: str):
    """Decorator for automatically tracking function performance."""
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            with performance_monitor(operation_name):
                return func(*args, **kwargs)
        return wrapper
    return decorator
