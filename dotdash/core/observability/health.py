"""
Health Check Module
===================

Named probes behind ``GET /morse/health``. A probe is a zero-argument
callable returning True when the piece it guards is usable.

Verdicts:
- every probe passes: healthy
- a probe returns False: degraded
- a probe raises: unhealthy (the endpoint answers 503)
"""
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

Probe = Callable[[], bool]


class HealthStatus(Enum):
    """Health check status, ordered from best to worst."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"

    @classmethod
    def worst(cls, statuses: Iterable["HealthStatus"]) -> "HealthStatus":
        ranking = list(cls)
        return max(statuses, key=ranking.index, default=cls.HEALTHY)


@dataclass
class HealthCheckResult:
    name: str
    status: HealthStatus
    message: str
    duration_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
            "duration_ms": round(self.duration_ms, 3),
        }


class HealthCheck:
    """
    Registry of named probes with an aggregated verdict.

    Usage:
        health = HealthCheck({"symbol_table": check_symbol_table})
        health.add_check("codec_roundtrip", check_codec_roundtrip)

        report = health.check_all()
        report["status"]   # "healthy" / "degraded" / "unhealthy"
    """

    def __init__(self, probes: Optional[Dict[str, Probe]] = None):
        self.checks: Dict[str, Probe] = dict(probes or {})

    def add_check(self, name: str, check_fn: Probe) -> None:
        """Register (or replace) the probe called ``name``."""
        self.checks[name] = check_fn

    def run_check(self, name: str) -> HealthCheckResult:
        """Run one probe. Unknown names are reported unhealthy."""
        probe = self.checks.get(name)
        if probe is None:
            return HealthCheckResult(name, HealthStatus.UNHEALTHY, f"Check '{name}' not found")

        start = time.perf_counter()
        try:
            passed = probe()
        except Exception as e:
            logger.warning(f"Health check {name} raised: {e}")
            status, message = HealthStatus.UNHEALTHY, str(e)
        else:
            status = HealthStatus.HEALTHY if passed else HealthStatus.DEGRADED
            message = "OK" if passed else "Check returned False"

        return HealthCheckResult(name, status, message, (time.perf_counter() - start) * 1000)

    def check_all(self) -> Dict[str, Any]:
        """
        Run every probe in registration order.

        Returns:
            ``{"status", "checks", "timestamp"}`` where ``status`` is the
            worst individual verdict
        """
        results = [self.run_check(name) for name in self.checks]
        return {
            "status": HealthStatus.worst(r.status for r in results).value,
            "checks": [r.to_dict() for r in results],
            "timestamp": time.time(),
        }

    def is_healthy(self) -> bool:
        return self.check_all()["status"] == HealthStatus.HEALTHY.value


# Default probes
def check_symbol_table() -> bool:
    """Forward and reverse Morse tables are populated and the same size."""
    from dotdash.core.codec.morse import MORSE_CODE_MAP, TEXT_MAP
    return bool(MORSE_CODE_MAP) and len(MORSE_CODE_MAP) == len(TEXT_MAP)


def check_codec_roundtrip() -> bool:
    """A phrase with letters, digits and a word break survives encode/decode."""
    from dotdash.core.codec.morse import morse_to_text, text_to_morse
    return morse_to_text(text_to_morse("SOS 73")) == "SOS 73"


def check_metrics() -> bool:
    """Metrics collector is reachable and can summarize."""
    from dotdash.core.observability.metrics import get_metrics
    return "translations" in get_metrics().get_summary()


DEFAULT_CHECKS: Dict[str, Probe] = {
    "symbol_table": check_symbol_table,
    "codec_roundtrip": check_codec_roundtrip,
    "metrics": check_metrics,
}

_health_check: Optional[HealthCheck] = None


def get_health_check() -> HealthCheck:
    """Process-wide HealthCheck with the default probes registered."""
    global _health_check
    if _health_check is None:
        _health_check = HealthCheck(DEFAULT_CHECKS)
    return _health_check
