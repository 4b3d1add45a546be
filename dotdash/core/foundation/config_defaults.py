"""
Dotdash Configuration Defaults
==============================

Centralized, documented constants for the translation service.

Runtime-tunable settings (host, port, log level, CORS) live in
``dotdash.config.schema.ServiceConfig``; the values here are fixed at
import time and only change with a release.

Usage:
------
    from dotdash.core.foundation.config_defaults import DEFAULTS

    app = FastAPI(title=DEFAULTS.SERVICE_TITLE, version=DEFAULTS.VERSION)
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class DotdashDefaults:
    """
    Centralized default values for dotdash.

    Categories:
    -----------
    1. Service identity - names reported by / and /morse/health
    2. Server - fallback bind address and port
    3. Metrics - history bounds for the in-process collector
    4. Chat relay - message id length and anonymous user prefix
    """

    # =========================================================================
    # SERVICE IDENTITY
    # =========================================================================

    SERVICE_NAME: str = "morse-service"
    """Name reported in health and root responses."""

    SERVICE_TITLE: str = "Dotdash Morse Service"
    """OpenAPI title."""

    VERSION: str = "1.0.0"

    # =========================================================================
    # SERVER
    # =========================================================================

    HOST: str = "0.0.0.0"
    PORT: int = 3007
    SERVICE_URL: str = "http://localhost:3007"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "info"

    # =========================================================================
    # METRICS
    # =========================================================================

    MAX_METRIC_HISTORY: int = 10_000
    """Maximum translation records kept for percentile computation."""

    MAX_DURATIONS_PER_DIRECTION: int = 1_000
    """Latency samples kept per direction."""

    MAX_TRACKED_USERS: int = 1_000
    """Distinct user ids counted; beyond this only the busiest are kept."""

    # =========================================================================
    # CHAT RELAY
    # =========================================================================

    MESSAGE_ID_LENGTH: int = 12
    ANONYMOUS_USER_PREFIX: str = "anonymous-"


DEFAULTS = DotdashDefaults()
