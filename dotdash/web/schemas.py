"""
Request/response models for the HTTP API.

Payload fields are typed ``Any``. Presence and type checks live in the routes,
which answer a missing or non-string field with their own 400 message.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TranslateRequest(BaseModel):
    text: Any = None
    morse: Any = None
    direction: Any = None


class TextToMorseRequest(BaseModel):
    text: Any = None


class MorseToTextRequest(BaseModel):
    morse: Any = None


class ApiResponse(BaseModel):
    """Envelope shared by every /morse and /metrics response."""
    success: bool
    message: str
    data: Optional[Any] = None
    error: Optional[str] = None
    code: Optional[str] = None
    timestamp: str = Field(default_factory=utc_now)


def api_success(message: str, data: Any = None) -> ApiResponse:
    return ApiResponse(success=True, message=message, data=data)


def api_error(
    status_code: int,
    message: str,
    error: Optional[str] = None,
    code: Optional[str] = None,
    data: Any = None,
) -> JSONResponse:
    body = ApiResponse(success=False, message=message, data=data, error=error, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
