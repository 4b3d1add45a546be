"""
Observability Module - Metrics, Health and Translation Logging
==============================================================

Usage:
    from dotdash.core.observability import get_metrics, get_health_check

    metrics = get_metrics()
    metrics.record_translation("text-to-morse", True, 0.001, input_length=3)
    summary = metrics.get_summary()

    report = get_health_check().check_all()
"""

from .health import (
    HealthCheck,
    HealthCheckResult,
    HealthStatus,
    get_health_check,
)
from .metrics import (
    DirectionMetrics,
    MetricsCollector,
    TranslationRecord,
    get_metrics,
    reset_metrics,
)
from .translation_log import RequestContext

__all__ = [
    # Health
    'HealthCheck',
    'HealthCheckResult',
    'HealthStatus',
    'get_health_check',
    # Metrics
    'DirectionMetrics',
    'MetricsCollector',
    'TranslationRecord',
    'get_metrics',
    'reset_metrics',
    # Logging
    'RequestContext',
]
