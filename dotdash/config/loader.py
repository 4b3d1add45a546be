"""
Service Config Loading
======================

Resolution order for the YAML file:
1. explicit path passed to ConfigLoader
2. $DOTDASH_CONFIG
3. ~/.dotdash/config.yaml
4. built-in defaults

Environment variables are applied on top of whichever source won.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional, Tuple

import yaml

from dotdash.core.utils.env_loader import get_env
from .defaults import CONFIG_PATH_ENV, DEFAULT_CONFIG_DIR, DEFAULT_CONFIG_FILE, DEFAULT_CONFIG_YAML
from .schema import ServiceConfig

logger = logging.getLogger(__name__)


def _origins(value: str) -> list:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


# (env var, dotted config attribute, parser). Earlier rows win for the same attribute.
ENV_OVERRIDES: Tuple[Tuple[str, str, Callable[[str], Any]], ...] = (
    ("DOTDASH_ENV", "environment", str),
    ("HOST", "server.host", str),
    ("PORT", "server.port", int),
    ("MORSE_SERVICE_PORT", "server.port", int),
    ("MORSE_SERVICE_URL", "server.service_url", str),
    ("LOG_LEVEL", "logging.level", str.lower),
    ("CORS_ORIGINS", "cors.allow_origins", _origins),
)


def _set_attr_path(obj: Any, dotted: str, value: Any) -> None:
    *parents, leaf = dotted.split(".")
    for name in parents:
        obj = getattr(obj, name)
    setattr(obj, leaf, value)


class ConfigLoader:
    """Loads a ServiceConfig once and caches it."""

    def __init__(self, config_path: Optional[str] = None, apply_env: bool = True):
        self.config_path = config_path
        self.apply_env = apply_env
        self._config: Optional[ServiceConfig] = None

    @property
    def config_dir(self) -> Path:
        return Path(DEFAULT_CONFIG_DIR).expanduser()

    @property
    def default_config_file(self) -> Path:
        return self.config_dir / DEFAULT_CONFIG_FILE

    def resolve_path(self) -> Optional[Path]:
        """First config file that exists, following the resolution order."""
        for explicit in (self.config_path, os.environ.get(CONFIG_PATH_ENV)):
            if not explicit:
                continue
            path = Path(explicit)
            if path.is_file():
                return path
            logger.warning(f"Config file {path} does not exist, trying next source")

        if self.default_config_file.is_file():
            return self.default_config_file
        return None

    def load(self) -> ServiceConfig:
        """Return the config, reading it on first call."""
        if self._config is None:
            path = self.resolve_path()
            if path is None:
                logger.debug("No config file found, using defaults")
                config = ServiceConfig.default()
            else:
                config = self._read(path)

            if self.apply_env:
                self._apply_env_overrides(config)
            self._config = config
        return self._config

    def _read(self, path: Path) -> ServiceConfig:
        """Parse ``path``; an unreadable or malformed file yields the defaults."""
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            logger.error(f"Cannot parse {path}, using defaults: {e}")
            return ServiceConfig.default()
        except OSError as e:
            logger.error(f"Cannot read {path}, using defaults: {e}")
            return ServiceConfig.default()

        if not isinstance(data, dict):
            logger.error(f"{path} must hold a YAML mapping, using defaults")
            return ServiceConfig.default()

        try:
            config = ServiceConfig.from_dict(data)
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid values in {path}, using defaults: {e}")
            return ServiceConfig.default()

        logger.info(f"Config loaded from {path}")
        return config

    def _apply_env_overrides(self, config: ServiceConfig) -> None:
        applied = set()
        for var, attr, parse in ENV_OVERRIDES:
            raw = get_env(var)
            if not raw or attr in applied:
                continue
            try:
                _set_attr_path(config, attr, parse(raw))
            except ValueError:
                logger.warning(f"Ignoring {var}={raw!r}: not a valid value for {attr}")
                continue
            applied.add(attr)

    def save(self, config: Optional[ServiceConfig] = None, path: Optional[Path] = None) -> Path:
        """Write ``config`` (default: the loaded one) as YAML."""
        config = config or self._config or ServiceConfig.default()
        target = Path(path) if path else self.default_config_file
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False))
        logger.info(f"Config saved to {target}")
        return target

    def create_default_config(self, force: bool = False) -> Path:
        """Write the commented template to ~/.dotdash/config.yaml unless it exists."""
        target = self.default_config_file
        if target.exists() and not force:
            logger.info(f"Keeping existing config {target}")
            return target

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(DEFAULT_CONFIG_YAML)
        logger.info(f"Wrote default config {target}")
        return target

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``server.port``."""
        node: Any = self.load()
        for part in key.split("."):
            if isinstance(node, dict):
                if part not in node:
                    return default
                node = node[part]
            elif hasattr(node, part):
                node = getattr(node, part)
            else:
                return default
        return node


def load_config(config_path: Optional[str] = None) -> ServiceConfig:
    """Load configuration with the standard resolution order."""
    return ConfigLoader(config_path).load()
