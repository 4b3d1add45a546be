"""
Service Configuration Schema
============================

Dataclass configuration for the dotdash service.
"""

from typing import List, Dict, Any
from dataclasses import dataclass, field

from dotdash.core.foundation.config_defaults import DEFAULTS


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = DEFAULTS.HOST
    port: int = DEFAULTS.PORT
    service_url: str = DEFAULTS.SERVICE_URL
    workers: int = 1


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = DEFAULTS.LOG_LEVEL


@dataclass
class CorsConfig:
    """CORS configuration."""
    allow_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass
class ServiceConfig:
    """
    Main service configuration.

    Loaded from ~/.dotdash/config.yaml or a custom path, then overridden
    by environment variables.
    """
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    cors: CorsConfig = field(default_factory=CorsConfig)

    environment: str = DEFAULTS.ENVIRONMENT

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @classmethod
    def default(cls) -> "ServiceConfig":
        """Create default configuration."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "service_url": self.server.service_url,
                "workers": self.server.workers,
            },
            "logging": {
                "level": self.logging.level,
            },
            "cors": {
                "allow_origins": list(self.cors.allow_origins),
            },
            "environment": self.environment,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServiceConfig":
        """Create from dictionary. Missing sections keep their defaults."""
        config = cls()

        if "server" in data:
            s = data["server"] or {}
            config.server = ServerConfig(
                host=s.get("host", DEFAULTS.HOST),
                port=int(s.get("port", DEFAULTS.PORT)),
                service_url=s.get("service_url", DEFAULTS.SERVICE_URL),
                workers=int(s.get("workers", 1)),
            )

        if "logging" in data:
            lg = data["logging"] or {}
            config.logging = LoggingConfig(
                level=lg.get("level", DEFAULTS.LOG_LEVEL),
            )

        if "cors" in data:
            c = data["cors"] or {}
            config.cors = CorsConfig(
                allow_origins=list(c.get("allow_origins", ["*"])),
            )

        config.environment = data.get("environment", DEFAULTS.ENVIRONMENT)

        return config
