"""
Translation Log
===============

One-line structured log records for translation and validation traffic.

Fields are rendered as ``key=value`` after the message so log shippers can
split them without a JSON formatter:

    Translation completed user_id=u1 direction=text-to-morse input_length=3 ...
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass
class RequestContext:
    """Caller identity forwarded by the gateway in x-* headers."""
    user_id: Optional[str] = None
    user_email: Optional[str] = None
    session_id: Optional[str] = None
    request_source: Optional[str] = None
    correlation_id: Optional[str] = None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RequestContext":
        return cls(
            user_id=headers.get("x-user-id"),
            user_email=headers.get("x-user-email"),
            session_id=headers.get("x-session-id"),
            request_source=headers.get("x-request-source"),
            correlation_id=headers.get("x-correlation-id") or headers.get("x-request-id"),
        )


def _fields(context: Optional[RequestContext], **extra: Any) -> Dict[str, Any]:
    context = context or RequestContext()
    fields = {
        "user_id": context.user_id or "anonymous",
        "request_source": context.request_source or "unknown",
        "correlation_id": context.correlation_id,
    }
    fields.update(extra)
    return fields


def _render(message: str, fields: Dict[str, Any]) -> str:
    parts = [f"{key}={value}" for key, value in fields.items() if value is not None]
    return f"{message} {' '.join(parts)}" if parts else message


def log_translation_request(context: Optional[RequestContext], direction: Optional[str], input_length: int = 0):
    logger.info(_render(
        "Translation requested",
        _fields(context, direction=direction, input_length=input_length),
    ))


def log_translation_success(
    context: Optional[RequestContext],
    direction: str,
    input_length: int,
    output_length: int,
    duration_ms: float,
):
    logger.info(_render(
        "Translation completed",
        _fields(
            context,
            direction=direction,
            input_length=input_length,
            output_length=output_length,
            duration=f"{duration_ms:.2f}ms",
        ),
    ))


def log_translation_error(
    error: Exception,
    context: Optional[RequestContext],
    direction: Optional[str],
    input_length: int,
    duration_ms: float,
):
    """Log a failed translation; the error type and message become fields."""
    logger.error(_render(
        "Translation failed",
        _fields(
            context,
            direction=direction,
            input_length=input_length,
            duration=f"{duration_ms:.2f}ms",
            error_type=type(error).__name__,
            error=str(error),
        ),
    ))


def log_validation_request(context: Optional[RequestContext], kind: str):
    logger.debug(_render("Validation requested", _fields(context, kind=kind)))


def log_validation_result(is_valid: bool, context: Optional[RequestContext], kind: str):
    logger.info(_render(
        f"Validation result: {'valid' if is_valid else 'invalid'}",
        _fields(context, kind=kind),
    ))
