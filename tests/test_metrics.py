"""
Tests for Observability Metrics Module
======================================
Tests for TranslationRecord, DirectionMetrics, MetricsCollector and the
singleton functions.
"""

import time

import pytest

from dotdash.core.observability.metrics import (
    DirectionMetrics,
    MetricsCollector,
    TranslationRecord,
    _percentile,
    get_metrics,
    reset_metrics,
)

# =============================================================================
# Helper Tests
# =============================================================================


@pytest.mark.unit
class TestPercentile:
    """Tests for the interpolated percentile helper."""

    def test_empty(self):
        """No samples gives 0.0."""
        assert _percentile([], 95) == 0.0

    def test_single_value(self):
        """One sample is every percentile."""
        assert _percentile([2.5], 50) == 2.5
        assert _percentile([2.5], 99) == 2.5

    def test_interpolates(self):
        """Percentiles between samples are interpolated."""
        assert _percentile([1.0, 2.0, 3.0, 4.0], 50) == pytest.approx(2.5)
        assert _percentile([4.0, 1.0, 3.0, 2.0], 100) == 4.0


# =============================================================================
# TranslationRecord / DirectionMetrics Tests
# =============================================================================


@pytest.mark.unit
class TestTranslationRecord:
    """Tests for the TranslationRecord dataclass."""

    def test_defaults(self):
        """Lengths default to zero and user to anonymous."""
        before = time.time()
        record = TranslationRecord(direction="text-to-morse", duration_s=0.1, success=True)
        assert record.input_length == 0
        assert record.output_length == 0
        assert record.user_id == "anonymous"
        assert record.timestamp >= before


@pytest.mark.unit
class TestDirectionMetrics:
    """Tests for DirectionMetrics aggregation properties."""

    def test_empty(self):
        """A fresh direction reports zeros."""
        dm = DirectionMetrics(direction="text-to-morse")
        assert dm.success_rate == 0.0
        assert dm.avg_duration_s == 0.0
        assert dm.avg_input_length == 0.0
        assert dm.avg_output_length == 0.0

    def test_rates_and_averages(self):
        """Averages use the right denominators."""
        dm = DirectionMetrics(
            direction="morse-to-text",
            total=4,
            successful=3,
            failed=1,
            total_input_length=40,
            total_output_length=9,
            durations=[0.1, 0.2, 0.3, 0.4],
        )
        assert dm.success_rate == 0.75
        assert dm.avg_input_length == 10.0
        assert dm.avg_output_length == 3.0
        assert dm.avg_duration_s == pytest.approx(0.25)

    def test_to_dict_shape(self):
        """to_dict carries latency and length sections."""
        data = DirectionMetrics(direction="x").to_dict()
        assert set(data) == {"direction", "total", "successful", "failed", "success_rate", "latency", "length"}
        assert set(data["latency"]) == {"avg_s", "p50_s", "p95_s", "p99_s"}


# =============================================================================
# MetricsCollector Tests
# =============================================================================


@pytest.mark.unit
class TestMetricsCollector:
    """Tests for MetricsCollector."""

    def test_record_translation(self):
        """Translations aggregate per direction."""
        metrics = MetricsCollector()
        metrics.record_translation("text-to-morse", True, 0.01, input_length=3, output_length=11)
        metrics.record_translation("text-to-morse", False, 0.02, input_length=6)

        dm = metrics.get_direction_metrics("text-to-morse")
        assert dm.total == 2
        assert dm.successful == 1
        assert dm.failed == 1
        assert dm.total_input_length == 9
        assert dm.total_output_length == 11

    def test_unknown_direction(self):
        """A missing direction is recorded as unknown."""
        metrics = MetricsCollector()
        metrics.record_translation(None, False, 0.001)
        assert metrics.get_direction_metrics("unknown").failed == 1

    def test_summary_totals(self):
        """Summary counts translations and success rate."""
        metrics = MetricsCollector()
        metrics.record_translation("text-to-morse", True, 0.01, user_id="u1")
        metrics.record_translation("morse-to-text", True, 0.01, user_id="u1")
        metrics.record_translation("morse-to-text", False, 0.01)

        summary = metrics.get_summary()
        translations = summary["translations"]
        assert translations["total"] == 3
        assert translations["successful"] == 2
        assert translations["failed"] == 1
        assert translations["success_rate"] == pytest.approx(0.6667)
        assert set(translations["per_direction"]) == {"text-to-morse", "morse-to-text"}
        assert translations["by_user"] == {"u1": 2, "anonymous": 1}

    def test_validations_requests_errors(self):
        """Labelled counters land in their summary sections."""
        metrics = MetricsCollector()
        metrics.record_validation("morse", True)
        metrics.record_validation("morse", True)
        metrics.record_validation("text", False)
        metrics.record_request("POST", "/morse/translate", 200, 0.004)
        metrics.record_request("POST", "/morse/translate", 400, 0.002)
        metrics.record_error("INVALID_INPUT", "/morse/translate")

        summary = metrics.get_summary()
        assert summary["validations"] == {"morse:valid": 2, "text:invalid": 1}
        assert summary["requests"]["total"] == 2
        assert summary["requests"]["by_route"]["POST /morse/translate 400"] == 1
        assert summary["errors"] == {"INVALID_INPUT /morse/translate": 1}

    def test_active_connections(self):
        """The live connection gauge is reported as set."""
        metrics = MetricsCollector()
        metrics.set_active_connections(3)
        assert metrics.get_summary()["active_connections"] == 3

    def test_history_is_bounded(self):
        """Only the newest max_history records are kept."""
        metrics = MetricsCollector(max_history=5)
        for i in range(8):
            metrics.record_translation("text-to-morse", True, float(i))
        assert metrics.get_summary()["translations"]["total"] == 5

    def test_users_are_bounded(self):
        """Past max_users distinct ids, only the busiest are counted."""
        metrics = MetricsCollector(max_users=3)
        for _ in range(5):
            metrics.record_translation("text-to-morse", True, 0.001, user_id="regular")
        for i in range(10):
            metrics.record_translation("text-to-morse", True, 0.001, user_id=f"rotating-{i}")

        by_user = metrics.get_summary()["translations"]["by_user"]
        assert len(by_user) == 3
        assert by_user["regular"] == 5

    def test_recent_errors_newest_first(self):
        """recent_errors lists failures, newest first."""
        metrics = MetricsCollector()
        metrics.record_translation("text-to-morse", False, 0.1, input_length=1)
        metrics.record_translation("text-to-morse", True, 0.1)
        metrics.record_translation("morse-to-text", False, 0.1, input_length=2)

        errors = metrics.recent_errors()
        assert [e["input_length"] for e in errors] == [2, 1]
        assert len(metrics.recent_errors(limit=1)) == 1

    def test_reset(self):
        """reset clears every counter."""
        metrics = MetricsCollector()
        metrics.record_translation("text-to-morse", True, 0.1)
        metrics.record_error("X", "/")
        metrics.reset()

        summary = metrics.get_summary()
        assert summary["translations"]["total"] == 0
        assert summary["errors"] == {}
        assert metrics.get_direction_metrics("text-to-morse") is None


# =============================================================================
# Singleton Tests
# =============================================================================


@pytest.mark.unit
class TestMetricsSingleton:
    """Tests for get_metrics / reset_metrics."""

    def test_same_instance(self):
        """get_metrics returns one shared collector."""
        assert get_metrics() is get_metrics()

    def test_reset_creates_new_instance(self):
        """reset_metrics drops the shared collector."""
        first = get_metrics()
        reset_metrics()
        assert get_metrics() is not first
