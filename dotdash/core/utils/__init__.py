"""Shared utilities: .env loading and tool response helpers."""

from .env_loader import get_env, get_env_bool, get_env_int, load_dotdash_env
from .tool_helpers import require_params, tool_error, tool_response, tool_wrapper

__all__ = [
    'get_env',
    'get_env_bool',
    'get_env_int',
    'load_dotdash_env',
    'require_params',
    'tool_error',
    'tool_response',
    'tool_wrapper',
]
