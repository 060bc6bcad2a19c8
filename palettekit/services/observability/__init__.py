"""
Observability module for PaletteKit.

Provides timing, error and event metrics for generation and extraction.
"""

from .metrics import (
    PerformanceMetrics,
    MetricsCollector,
    get_metrics_collector,
    reset_metrics,
    record_event,
    performance_monitor,
    performance_tracked,
)

__all__ = [
    'PerformanceMetrics',
    'MetricsCollector',
    'get_metrics_collector',
    'reset_metrics',
    'record_event',
    'performance_monitor',
    'performance_tracked',
]
