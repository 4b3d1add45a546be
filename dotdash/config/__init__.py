"""Service configuration: dataclass schema and YAML/env loader."""

from .loader import ConfigLoader, load_config
from .schema import CorsConfig, LoggingConfig, ServerConfig, ServiceConfig

__all__ = [
    'ConfigLoader',
    'load_config',
    'ServiceConfig',
    'ServerConfig',
    'LoggingConfig',
    'CorsConfig',
]
