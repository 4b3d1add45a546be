"""
Tests for configuration loading
===============================
ServiceConfig (de)serialization, YAML loading and environment overrides.
"""

import pytest
import yaml

from dotdash.config import ConfigLoader, ServiceConfig, load_config
from dotdash.core.utils.env_loader import get_env_bool, get_env_int, load_dotdash_env, reset_env_loaded


@pytest.mark.unit
class TestServiceConfig:
    """Tests for the dataclass schema."""

    def test_defaults(self):
        """Defaults match the service's fixed defaults."""
        config = ServiceConfig.default()
        assert config.server.host == "0.0.0.0"
        assert config.server.port == 3007
        assert config.logging.level == "info"
        assert config.cors.allow_origins == ["*"]
        assert config.is_development

    def test_dict_round_trip(self):
        """from_dict(to_dict()) reproduces the config."""
        config = ServiceConfig.default()
        config.server.port = 9000
        config.environment = "production"
        assert ServiceConfig.from_dict(config.to_dict()) == config

    def test_partial_dict_keeps_defaults(self):
        """Sections missing from the dict keep their defaults."""
        config = ServiceConfig.from_dict({"server": {"port": "8080"}})
        assert config.server.port == 8080
        assert config.server.host == "0.0.0.0"
        assert config.logging.level == "info"


@pytest.mark.unit
class TestConfigLoader:
    """Tests for ConfigLoader resolution and overrides."""

    def test_defaults_when_no_file(self):
        """Without any file the defaults are used."""
        assert ConfigLoader().load() == ServiceConfig.default()

    def test_explicit_path(self, tmp_path):
        """An explicit YAML path is loaded."""
        path = tmp_path / "svc.yaml"
        path.write_text(yaml.dump({"environment": "production", "server": {"port": 4000}}))
        config = ConfigLoader(str(path)).load()
        assert config.server.port == 4000
        assert not config.is_development

    def test_env_path(self, tmp_path, monkeypatch):
        """DOTDASH_CONFIG points at the config file."""
        path = tmp_path / "env.yaml"
        path.write_text(yaml.dump({"logging": {"level": "debug"}}))
        monkeypatch.setenv("DOTDASH_CONFIG", str(path))
        assert load_config().logging.level == "debug"

    def test_missing_path_falls_back(self, tmp_path):
        """A missing explicit file falls back to defaults."""
        assert ConfigLoader(str(tmp_path / "nope.yaml")).load() == ServiceConfig.default()

    @pytest.mark.parametrize("content", ["server: [unclosed", "- just\n- a list\n"])
    def test_bad_yaml_falls_back(self, tmp_path, content):
        """Unparseable or non-mapping YAML falls back to defaults."""
        path = tmp_path / "bad.yaml"
        path.write_text(content)
        assert ConfigLoader(str(path)).load() == ServiceConfig.default()

    def test_env_overrides(self, monkeypatch):
        """Environment variables override file values."""
        monkeypatch.setenv("DOTDASH_ENV", "production")
        monkeypatch.setenv("HOST", "127.0.0.1")
        monkeypatch.setenv("MORSE_SERVICE_PORT", "3100")
        monkeypatch.setenv("MORSE_SERVICE_URL", "http://morse:3100")
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

        config = ConfigLoader().load()
        assert config.environment == "production"
        assert config.server.host == "127.0.0.1"
        assert config.server.port == 3100
        assert config.server.service_url == "http://morse:3100"
        assert config.logging.level == "warning"
        assert config.cors.allow_origins == ["http://a.test", "http://b.test"]

    def test_port_wins_over_service_port(self, monkeypatch):
        """PORT takes precedence over MORSE_SERVICE_PORT."""
        monkeypatch.setenv("PORT", "5000")
        monkeypatch.setenv("MORSE_SERVICE_PORT", "3100")
        assert ConfigLoader().load().server.port == 5000

    def test_env_disabled(self, monkeypatch):
        """apply_env=False ignores the environment."""
        monkeypatch.setenv("PORT", "5000")
        assert ConfigLoader(apply_env=False).load().server.port == 3007

    def test_load_is_cached(self):
        """load returns the same object on repeated calls."""
        loader = ConfigLoader()
        assert loader.load() is loader.load()

    def test_create_default_and_save(self, tmp_path):
        """create_default_config writes a loadable file; save overwrites it."""
        loader = ConfigLoader()
        path = loader.create_default_config()
        assert path.exists()
        assert ConfigLoader(str(path)).load() == ServiceConfig.default()

        config = ServiceConfig.default()
        config.server.port = 4321
        loader.save(config, path)
        assert ConfigLoader(str(path)).load().server.port == 4321

    def test_get_by_key_path(self):
        """get resolves dotted key paths."""
        loader = ConfigLoader()
        assert loader.get("server.port") == 3007
        assert loader.get("server.missing", "fallback") == "fallback"


@pytest.mark.unit
class TestEnvLoader:
    """Tests for .env loading helpers."""

    def test_loads_dotenv_from_cwd(self, tmp_path, monkeypatch):
        """A .env in the working directory is loaded once."""
        # setenv then delenv so teardown removes what load_dotenv writes
        for name in ("DOTDASH_TEST_FLAG", "DOTDASH_TEST_NUM"):
            monkeypatch.setenv(name, "")
            monkeypatch.delenv(name)
        (tmp_path / ".env").write_text("DOTDASH_TEST_FLAG=yes\nDOTDASH_TEST_NUM=12\n")
        reset_env_loaded()

        assert load_dotdash_env() is True
        assert get_env_bool("DOTDASH_TEST_FLAG") is True
        assert get_env_int("DOTDASH_TEST_NUM") == 12

    def test_typed_getters_defaults(self, monkeypatch):
        """Unparseable values fall back to the default."""
        monkeypatch.setenv("DOTDASH_TEST_NUM", "twelve")
        monkeypatch.setenv("DOTDASH_TEST_FLAG", "maybe")
        assert get_env_int("DOTDASH_TEST_NUM", 7) == 7
        assert get_env_bool("DOTDASH_TEST_FLAG", True) is True
