"""
Tool Helpers
============

Plumbing for dict-in/dict-out tools. A tool takes a params dict and always
returns a dict, either ``{"success": True, ...fields}`` or
``{"success": False, "error": ..., "code": ...}``. Codec exceptions never
escape a wrapped tool.

Usage:
    @tool_wrapper(required_params=["text"])
    def encode_tool(params):
        return tool_response(morse=text_to_morse(params["text"]))
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence

from dotdash.core.foundation.exceptions import DotdashError

logger = logging.getLogger(__name__)

ToolParams = Dict[str, Any]
ToolResult = Dict[str, Any]
Tool = Callable[[ToolParams], ToolResult]

# Canonical param -> spellings accepted in its place.
PARAM_ALIASES: Mapping[str, Sequence[str]] = {
    "text": ("message", "content", "plain_text"),
    "morse": ("morse_code", "code"),
    "direction": ("mode",),
    "action": ("operation", "op"),
}


def resolve_aliases(params: Mapping[str, Any], names: Iterable[str]) -> ToolParams:
    """
    Return a copy of ``params`` with aliased values moved onto their canonical key.

    Only the keys in ``names`` are resolved, and a canonical key that is
    already present wins over any alias. ``params`` itself is left untouched.
    """
    resolved = dict(params)
    for name in names:
        if name in resolved:
            continue
        alias = next((a for a in PARAM_ALIASES.get(name, ()) if a in resolved), None)
        if alias is not None:
            resolved[name] = resolved.pop(alias)
    return resolved


def tool_response(data: Optional[Mapping[str, Any]] = None, **fields: Any) -> ToolResult:
    """Successful result: ``success=True`` merged with ``data``, then ``fields``."""
    return {"success": True, **(data or {}), **fields}


def tool_error(error: str, code: Optional[str] = None, **fields: Any) -> ToolResult:
    """Failed result with a message and, when known, a machine-readable code."""
    result: ToolResult = {"success": False, "error": error}
    if code:
        result["code"] = code
    result.update(fields)
    return result


def require_params(params: Mapping[str, Any], required: Iterable[str]) -> Optional[ToolResult]:
    """Return a MISSING_PARAM error for the first absent or empty param, else None."""
    missing = next((name for name in required if not params.get(name)), None)
    if missing is None:
        return None
    return tool_error(f"{missing} parameter is required", code="MISSING_PARAM")


def tool_wrapper(
    required_params: Optional[Sequence[str]] = None,
    optional_params: Optional[Sequence[str]] = None,
    log_errors: bool = True,
) -> Callable[[Tool], Tool]:
    """
    Make a tool validate its params and never raise.

    - aliases of ``required_params`` and ``optional_params`` are resolved on a
      copy of the caller's dict, then each required param must be non-empty
    - DotdashError becomes ``tool_error(**error.to_dict())`` (bad input, debug log)
    - any other exception becomes ``Failed to execute <tool>: <error>``

    Args:
        required_params: Params that must be present and non-empty
        optional_params: Params whose aliases are resolved but may be absent
        log_errors: Log unexpected exceptions with their traceback
    """
    required = list(required_params or [])
    known = required + [name for name in optional_params or () if name not in required]

    def decorator(func: Tool) -> Tool:
        @wraps(func)
        def wrapper(params: ToolParams) -> ToolResult:
            params = resolve_aliases(params, known)
            missing = require_params(params, required)
            if missing is not None:
                return missing

            try:
                return func(params)
            except DotdashError as e:
                logger.debug(f"{func.__name__} rejected input: {e}")
                return tool_error(**e.to_dict())
            except Exception as e:
                if log_errors:
                    logger.exception(f"{func.__name__} failed")
                return tool_error(f"Failed to execute {func.__name__}: {e}")

        wrapper.required_params = required
        return wrapper

    return decorator
