"""
Metrics Collector - Translation Service Metrics
===============================================

Tracks translations, validations, HTTP requests and errors with
statistical aggregation. Provides p50/p95/p99 latencies per direction,
success rates and input/output size averages.

Usage:
    metrics = get_metrics()

    metrics.record_translation("text-to-morse", True, 0.002, input_length=3, output_length=11)
    metrics.record_validation("morse", is_valid=True)
    metrics.record_request("POST", "/morse/translate", 200, 0.004)

    summary = metrics.get_summary()
"""

import logging
import math
import threading
import time
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dotdash.core.foundation.config_defaults import DEFAULTS

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


def _percentile(values: List[float], pct: float) -> float:
    """Linear-interpolated percentile of ``values`` (any order)."""
    if not values:
        return 0.0
    sorted_vals = sorted(values)
    idx = (pct / 100) * (len(sorted_vals) - 1)
    lower = int(math.floor(idx))
    upper = int(math.ceil(idx))
    if lower == upper:
        return sorted_vals[lower]
    frac = idx - lower
    return sorted_vals[lower] * (1 - frac) + sorted_vals[upper] * frac


@dataclass
class TranslationRecord:
    """Record of a single translation."""
    direction: str
    duration_s: float
    success: bool
    input_length: int = 0
    output_length: int = 0
    user_id: str = ANONYMOUS
    timestamp: float = field(default_factory=time.time)


@dataclass
class DirectionMetrics:
    """Aggregated metrics for one translation direction."""
    direction: str
    total: int = 0
    successful: int = 0
    failed: int = 0
    total_input_length: int = 0
    total_output_length: int = 0
    durations: List[float] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.successful / self.total

    @property
    def avg_duration_s(self) -> float:
        if not self.durations:
            return 0.0
        return sum(self.durations) / len(self.durations)

    @property
    def avg_input_length(self) -> float:
        if self.total == 0:
            return 0.0
        return self.total_input_length / self.total

    @property
    def avg_output_length(self) -> float:
        if self.successful == 0:
            return 0.0
        return self.total_output_length / self.successful

    @property
    def p50_duration_s(self) -> float:
        return _percentile(self.durations, 50)

    @property
    def p95_duration_s(self) -> float:
        return _percentile(self.durations, 95)

    @property
    def p99_duration_s(self) -> float:
        return _percentile(self.durations, 99)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'direction': self.direction,
            'total': self.total,
            'successful': self.successful,
            'failed': self.failed,
            'success_rate': round(self.success_rate, 4),
            'latency': {
                'avg_s': round(self.avg_duration_s, 6),
                'p50_s': round(self.p50_duration_s, 6),
                'p95_s': round(self.p95_duration_s, 6),
                'p99_s': round(self.p99_duration_s, 6),
            },
            'length': {
                'avg_input': round(self.avg_input_length, 2),
                'avg_output': round(self.avg_output_length, 2),
            },
        }


class MetricsCollector:
    """
    Collects translation service metrics.

    Thread-safe. Keeps a bounded history of translation records and
    labelled counters for validations, requests and errors.
    """

    def __init__(
        self,
        max_history: int = DEFAULTS.MAX_METRIC_HISTORY,
        max_users: int = DEFAULTS.MAX_TRACKED_USERS,
    ):
        self._records: List[TranslationRecord] = []
        self._directions: Dict[str, DirectionMetrics] = {}
        self._validations: Dict[str, int] = defaultdict(int)
        self._requests: Dict[str, int] = defaultdict(int)
        self._request_durations: List[float] = []
        self._errors: Dict[str, int] = defaultdict(int)
        self._users: Counter = Counter()
        self._active_connections = 0
        self._lock = threading.Lock()
        self._max_history = max_history
        self._max_users = max_users
        self._start_time = time.time()

    @property
    def uptime_s(self) -> float:
        return time.time() - self._start_time

    def record_translation(
        self,
        direction: Optional[str],
        success: bool,
        duration_s: float,
        input_length: int = 0,
        output_length: int = 0,
        user_id: Optional[str] = None,
    ):
        """
        Record one translation attempt.

        Args:
            direction: text-to-morse / morse-to-text (``unknown`` if None)
            success: Whether the translation produced output
            duration_s: Wall time in seconds
            input_length: Length of the original payload
            output_length: Length of the translated payload
            user_id: Caller, ``anonymous`` if not known
        """
        direction = direction or "unknown"
        record = TranslationRecord(
            direction=direction,
            duration_s=duration_s,
            success=success,
            input_length=input_length,
            output_length=output_length,
            user_id=user_id or ANONYMOUS,
        )

        with self._lock:
            self._records.append(record)
            if len(self._records) > self._max_history:
                self._records = self._records[-self._max_history:]

            if direction not in self._directions:
                self._directions[direction] = DirectionMetrics(direction=direction)

            dm = self._directions[direction]
            dm.total += 1
            if success:
                dm.successful += 1
                dm.total_output_length += output_length
            else:
                dm.failed += 1
            dm.total_input_length += input_length
            dm.durations.append(duration_s)

            if len(dm.durations) > DEFAULTS.MAX_DURATIONS_PER_DIRECTION:
                dm.durations = dm.durations[-DEFAULTS.MAX_DURATIONS_PER_DIRECTION:]

            self._users[record.user_id] += 1
            if len(self._users) > self._max_users:
                # keep only the busiest ids
                self._users = Counter(dict(self._users.most_common(self._max_users)))

    def record_validation(self, kind: str, is_valid: bool):
        """Count a validation call; ``kind`` is ``morse`` or ``text``."""
        result = "valid" if is_valid else "invalid"
        with self._lock:
            self._validations[f"{kind}:{result}"] += 1

    def record_request(
        self,
        method: str,
        endpoint: str,
        status_code: int,
        duration_s: float,
    ):
        """Count an HTTP request, keyed by ``METHOD endpoint status``."""
        with self._lock:
            self._requests[f"{method} {endpoint} {status_code}"] += 1
            self._request_durations.append(duration_s)
            if len(self._request_durations) > self._max_history:
                self._request_durations = self._request_durations[-self._max_history:]

    def record_error(self, error_type: str, endpoint: str):
        """Count an error by type and endpoint."""
        with self._lock:
            self._errors[f"{error_type} {endpoint}"] += 1

    def set_active_connections(self, count: int):
        with self._lock:
            self._active_connections = count

    def get_direction_metrics(self, direction: str) -> Optional[DirectionMetrics]:
        """Get metrics for a specific direction."""
        with self._lock:
            return self._directions.get(direction)

    def get_summary(self) -> Dict[str, Any]:
        """
        Get a comprehensive metrics summary.

        Returns:
            Dict with uptime, translation totals, per-direction stats,
            validation/request/error counters and live connections.
        """
        with self._lock:
            total = len(self._records)
            successful = sum(1 for r in self._records if r.success)
            durations = [r.duration_s for r in self._records]

            return {
                'uptime_s': round(self.uptime_s, 1),
                'translations': {
                    'total': total,
                    'successful': successful,
                    'failed': total - successful,
                    'success_rate': round(successful / total, 4) if total else 0,
                    'latency': {
                        'p50_s': round(_percentile(durations, 50), 6),
                        'p95_s': round(_percentile(durations, 95), 6),
                        'p99_s': round(_percentile(durations, 99), 6),
                    },
                    'per_direction': {
                        name: dm.to_dict() for name, dm in self._directions.items()
                    },
                    'by_user': dict(self._users),
                },
                'validations': dict(self._validations),
                'requests': {
                    'total': sum(self._requests.values()),
                    'by_route': dict(self._requests),
                    'p95_s': round(_percentile(self._request_durations, 95), 6),
                },
                'errors': dict(self._errors),
                'active_connections': self._active_connections,
            }

    def recent_errors(self, limit: int = 10) -> List[Dict[str, Any]]:
        """Most recent failed translations, newest first."""
        with self._lock:
            failed = [r for r in reversed(self._records) if not r.success]
            return [
                {
                    'direction': r.direction,
                    'user_id': r.user_id,
                    'input_length': r.input_length,
                    'duration_s': r.duration_s,
                    'timestamp': r.timestamp,
                }
                for r in failed[:limit]
            ]

    def reset(self):
        """Clear all metrics."""
        with self._lock:
            self._records.clear()
            self._directions.clear()
            self._validations.clear()
            self._requests.clear()
            self._request_durations.clear()
            self._errors.clear()
            self._users.clear()
            self._active_connections = 0
            self._start_time = time.time()


_metrics: Optional[MetricsCollector] = None
_metrics_lock = threading.Lock()


def get_metrics() -> MetricsCollector:
    """Get the process-wide MetricsCollector."""
    global _metrics
    if _metrics is None:
        with _metrics_lock:
            if _metrics is None:
                _metrics = MetricsCollector()
    return _metrics


def reset_metrics():
    """Drop the process-wide collector (tests)."""
    global _metrics
    with _metrics_lock:
        _metrics = None
