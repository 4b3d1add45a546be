"""
Pytest configuration and shared fixtures for dotdash tests.

Every fixture builds its own collectors and config so tests never share
process-wide state.
"""
import pytest
from fastapi.testclient import TestClient

from dotdash.config import ServiceConfig
from dotdash.core.observability.metrics import MetricsCollector, reset_metrics
from dotdash.core.utils.env_loader import reset_env_loaded
from dotdash.web.api import create_app
from dotdash.web.websocket import RoomManager

SERVICE_ENV_VARS = (
    "DOTDASH_ENV",
    "DOTDASH_CONFIG",
    "HOST",
    "PORT",
    "MORSE_SERVICE_PORT",
    "MORSE_SERVICE_URL",
    "LOG_LEVEL",
    "CORS_ORIGINS",
)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: fast offline test")


# =============================================================================
# Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Strip service env vars and point HOME at an empty directory."""
    for name in SERVICE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_env_loaded()
    reset_metrics()
    yield
    reset_metrics()


# =============================================================================
# Service Fixtures
# =============================================================================

@pytest.fixture
def metrics():
    """Fresh metrics collector."""
    return MetricsCollector()


@pytest.fixture
def service_config():
    """Default configuration (development environment)."""
    return ServiceConfig.default()


@pytest.fixture
def room_manager(metrics):
    return RoomManager(metrics=metrics)


@pytest.fixture
def app(service_config, metrics, room_manager):
    return create_app(config=service_config, metrics=metrics, room_manager=room_manager)


@pytest.fixture
def client(app):
    """TestClient sharing one event loop for all requests and sockets."""
    with TestClient(app) as test_client:
        yield test_client
