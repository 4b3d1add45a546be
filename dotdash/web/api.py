"""
FastAPI Web API
===============

REST and WebSocket API for the Morse translation service.

Endpoints:
- POST /morse/translate - Translate in either direction
- POST /morse/text-to-morse - Encode text
- POST /morse/morse-to-text - Decode Morse
- GET /morse/validate/morse - Syntactic Morse check
- GET /morse/validate/text - Encodability check
- GET /morse/characters - Supported characters
- GET /morse/health - Health report
- GET /metrics - Metrics summary
- WS /ws/rooms/{room_id} - Real-time chat relay
"""

import json
import logging
import time
from typing import Any, Callable, Optional

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotdash.config import ServiceConfig, load_config
from dotdash.core.codec import (
    Direction,
    get_supported_characters,
    morse_to_text,
    text_to_morse,
    translate,
    validate_morse_code,
    validate_text,
)
from dotdash.core.foundation.config_defaults import DEFAULTS
from dotdash.core.foundation.exceptions import DotdashError, InvalidInputError
from dotdash.core.observability import translation_log
from dotdash.core.observability.health import HealthCheck, get_health_check
from dotdash.core.observability.metrics import MetricsCollector, get_metrics
from dotdash.core.observability.translation_log import RequestContext
from dotdash.web.schemas import (
    ApiResponse,
    MorseToTextRequest,
    TextToMorseRequest,
    TranslateRequest,
    api_error,
    api_success,
    utc_now,
)
from dotdash.web.websocket import RoomManager, anonymous_user_id

logger = logging.getLogger(__name__)

ENDPOINTS = {
    "translate": "POST /morse/translate",
    "textToMorse": "POST /morse/text-to-morse",
    "morseToText": "POST /morse/morse-to-text",
    "validateMorse": "GET /morse/validate/morse",
    "validateText": "GET /morse/validate/text",
    "characters": "GET /morse/characters",
    "health": "GET /morse/health",
    "metrics": "GET /metrics",
    "chat": "WS /ws/rooms/{room_id}",
}


def _context(request: Request) -> RequestContext:
    context = getattr(request.state, "context", None)
    return context if context is not None else RequestContext.from_headers(request.headers)


def _input_length(value: Any) -> int:
    return len(value) if isinstance(value, str) else 0


def create_app(
    config: Optional[ServiceConfig] = None,
    metrics: Optional[MetricsCollector] = None,
    room_manager: Optional[RoomManager] = None,
    health: Optional[HealthCheck] = None,
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        config: Service configuration (loaded from file/env if omitted)
        metrics: Metrics collector (process-wide singleton if omitted)
        room_manager: Chat relay (a fresh one bound to ``metrics`` if omitted)
        health: Health check registry (singleton if omitted)

    Returns:
        Configured FastAPI app
    """
    config = config or load_config()
    metrics = metrics or get_metrics()
    room_manager = room_manager or RoomManager(metrics=metrics)
    health = health or get_health_check()

    app = FastAPI(
        title=DEFAULTS.SERVICE_TITLE,
        description="Text to Morse code translation and chat relay",
        version=DEFAULTS.VERSION,
    )
    app.state.config = config
    app.state.metrics = metrics
    app.state.room_manager = room_manager

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Attach caller context, then time, log and count the request."""
        request.state.context = RequestContext.from_headers(request.headers)
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            duration = time.perf_counter() - start
            route = request.scope.get("route")
            if route is not None:
                endpoint = route.path
            else:
                endpoint = "<unmatched>" if status_code == 404 else request.url.path
            metrics.record_request(request.method, endpoint, status_code, duration)
            logger.info(f"{request.method} {request.url.path} {status_code} {duration * 1000:.1f}ms")

    # Error handlers
    @app.exception_handler(DotdashError)
    async def dotdash_error_handler(request: Request, exc: DotdashError):
        metrics.record_error(exc.code, request.url.path)
        details = {k: v for k, v in exc.to_dict().items() if k not in ("error", "code")}
        return api_error(exc.status_code, exc.message, code=exc.code, data=details or None)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        detail = "; ".join(str(err.get("msg", err)) for err in exc.errors())
        metrics.record_error("REQUEST_VALIDATION", request.url.path)
        return api_error(400, "Invalid request", error=detail, code="INVALID_REQUEST")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return JSONResponse(
                status_code=404,
                content={"success": False, "message": "Route not found", "path": request.url.path},
            )
        return api_error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=exc)
        metrics.record_error(type(exc).__name__, request.url.path)
        return api_error(
            500,
            "Internal server error",
            error=str(exc) if config.is_development else None,
        )

    def run_translation(
        request: Request,
        direction: Optional[str],
        payload: Any,
        operation: Callable[[], Any],
        output_of: Callable[[Any], str],
    ) -> Any:
        """Run one codec call with translation logging and metrics."""
        context = _context(request)
        input_length = _input_length(payload)
        translation_log.log_translation_request(context, direction, input_length)

        start = time.perf_counter()
        try:
            result = operation()
        except DotdashError as e:
            duration = time.perf_counter() - start
            metrics.record_translation(direction, False, duration, input_length, user_id=context.user_id)
            translation_log.log_translation_error(e, context, direction, input_length, duration * 1000)
            raise

        duration = time.perf_counter() - start
        output_length = len(output_of(result))
        metrics.record_translation(
            direction, True, duration, input_length, output_length, user_id=context.user_id
        )
        translation_log.log_translation_success(
            context, direction, input_length, output_length, duration * 1000
        )
        return result

    # Routes
    @app.get("/")
    async def root():
        """Service information."""
        return {
            "service": DEFAULTS.SERVICE_NAME,
            "version": DEFAULTS.VERSION,
            "status": "running",
            "timestamp": utc_now(),
            "endpoints": ENDPOINTS,
        }

    @app.get("/metrics", response_model=ApiResponse)
    async def metrics_summary():
        """In-process metrics summary."""
        metrics.set_active_connections(room_manager.connection_count)
        summary = metrics.get_summary()
        summary["recent_errors"] = metrics.recent_errors()
        return api_success("Metrics retrieved", summary)

    @app.post("/morse/translate", response_model=ApiResponse)
    async def translate_endpoint(body: TranslateRequest, request: Request):
        """Translate text to morse or morse to text."""
        direction = body.direction if isinstance(body.direction, str) else None
        result = run_translation(
            request,
            direction,
            body.text if direction == Direction.TEXT_TO_MORSE.value else body.morse,
            lambda: translate({"direction": body.direction, "text": body.text, "morse": body.morse}),
            lambda r: r.translated,
        )
        return api_success("Translation successful", result.to_dict())

    @app.post("/morse/text-to-morse", response_model=ApiResponse)
    async def text_to_morse_endpoint(body: TextToMorseRequest, request: Request):
        """Convert text to morse code."""
        if not body.text or not isinstance(body.text, str):
            raise InvalidInputError("Text is required and must be a string")

        morse = run_translation(
            request,
            Direction.TEXT_TO_MORSE.value,
            body.text,
            lambda: text_to_morse(body.text),
            lambda r: r,
        )
        return api_success("Text to morse conversion successful", {
            "original": body.text,
            "morse": morse,
            "timestamp": utc_now(),
        })

    @app.post("/morse/morse-to-text", response_model=ApiResponse)
    async def morse_to_text_endpoint(body: MorseToTextRequest, request: Request):
        """Convert morse code to text."""
        if not body.morse or not isinstance(body.morse, str):
            raise InvalidInputError("Morse code is required and must be a string")

        text = run_translation(
            request,
            Direction.MORSE_TO_TEXT.value,
            body.morse,
            lambda: morse_to_text(body.morse),
            lambda r: r,
        )
        return api_success("Morse to text conversion successful", {
            "original": body.morse,
            "text": text,
            "timestamp": utc_now(),
        })

    @app.get("/morse/validate/morse", response_model=ApiResponse)
    async def validate_morse_endpoint(request: Request, morse: Optional[str] = None):
        """Validate morse code format."""
        if not morse:
            raise InvalidInputError("Morse code parameter is required")

        context = _context(request)
        translation_log.log_validation_request(context, "morse")
        is_valid = validate_morse_code(morse)
        metrics.record_validation("morse", is_valid)
        translation_log.log_validation_result(is_valid, context, "morse")

        return api_success("Validation completed", {
            "morse": morse,
            "isValid": is_valid,
            "timestamp": utc_now(),
        })

    @app.get("/morse/validate/text", response_model=ApiResponse)
    async def validate_text_endpoint(request: Request, text: Optional[str] = None):
        """Validate text for morse conversion."""
        if not text:
            raise InvalidInputError("Text parameter is required")

        context = _context(request)
        translation_log.log_validation_request(context, "text")
        is_valid = validate_text(text)
        metrics.record_validation("text", is_valid)
        translation_log.log_validation_result(is_valid, context, "text")

        return api_success("Validation completed", {
            "text": text,
            "isValid": is_valid,
            "timestamp": utc_now(),
        })

    @app.get("/morse/characters", response_model=ApiResponse)
    async def characters_endpoint():
        """List supported characters."""
        characters = get_supported_characters()
        return api_success("Supported characters retrieved", {
            "characters": characters,
            "count": len(characters),
            "timestamp": utc_now(),
        })

    @app.get("/morse/health")
    async def health_endpoint():
        """Health check."""
        report = health.check_all()
        data = {
            "service": DEFAULTS.SERVICE_NAME,
            "status": report["status"],
            "timestamp": utc_now(),
            "uptime": round(metrics.uptime_s, 3),
            "checks": report["checks"],
        }
        if report["status"] == "unhealthy":
            body = ApiResponse(success=False, message="Morse Service is unhealthy", data=data)
            return JSONResponse(status_code=503, content=body.model_dump())
        return api_success("Morse Service is healthy", data)

    @app.websocket("/ws/rooms/{room_id}")
    async def room_socket(
        websocket: WebSocket,
        room_id: str,
        user_id: Optional[str] = None,
        email: Optional[str] = None,
    ):
        """Real-time chat relay for one room."""
        await websocket.accept()
        conn = await room_manager.connect(websocket, room_id, user_id or anonymous_user_id(), email)

        try:
            while True:
                raw = await websocket.receive_text()
                try:
                    event = json.loads(raw)
                except ValueError:
                    await room_manager.send_error(conn, "Invalid JSON payload", "INVALID_PAYLOAD")
                    continue
                if not isinstance(event, dict):
                    await room_manager.send_error(conn, "Event must be a JSON object", "INVALID_PAYLOAD")
                    continue

                if not await room_manager.handle_event(conn, event):
                    await room_manager.disconnect(conn)
                    await websocket.close()
                    return
        except WebSocketDisconnect:
            logger.debug(f"WebSocket closed by client: room={room_id}, user={conn.user_id}")
        finally:
            await room_manager.disconnect(conn)

    return app
