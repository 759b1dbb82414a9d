"""Typed gateway failures and the handlers that render them into the JSON envelope."""
import uuid
import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import Request, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from gateway.constants import Stage
from gateway.envelope import error_response

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base for every failure the router turns into an error envelope."""

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(error)
        self.error = error
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_content(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            content["details"] = self.details
        return content


class ConfigurationError(GatewayError):
    """A credential the endpoint needs is not configured."""


class InvalidRequestError(GatewayError):
    status_code = 400


class InternalError(GatewayError):
    status_code = 500


# Per-stage wording for upstream failures
_UPSTREAM_MESSAGES = {
    Stage.PRESENCE: "X-on API error: {status}",
    Stage.CALL_LIST: "X-on API returned {status}",
    Stage.QUEUE: "X-on API error",
    Stage.RESOLVING: "Failed to get audio list: {status}",
    Stage.DOWNLOADING: "Failed to download audio file",
    Stage.TRANSCRIBING: "Whisper transcription failed: {status}",
    Stage.SUMMARIZING: "GPT generation failed: {status}",
}


class UpstreamError(GatewayError):
    """Non-2xx from the telephony platform or an AI provider.

    Carries the upstream status and raw body; the response forwards the
    upstream status code unchanged.
    """

    def __init__(self, stage: Stage, status: int, body: str = ""):
        message = _UPSTREAM_MESSAGES.get(stage, "Upstream error: {status}").format(status=status)
        super().__init__(message, details=body, status_code=status)
        self.stage = stage
        self.upstream_status = status
        self.body = body

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["stage"] = self.stage.value
        content["status"] = self.upstream_status
        return content


class UnexpectedResponseError(GatewayError):
    """Provider answered 2xx but without the field the stage needs."""

    status_code = 502

    def __init__(self, stage: Stage, details: str):
        super().__init__(f"Unexpected response during {stage.value}", details=details)
        self.stage = stage

    def to_content(self) -> Dict[str, Any]:
        content = super().to_content()
        content["stage"] = self.stage.value
        return content


class PaginationLimitError(GatewayError):
    status_code = 502

    def __init__(self, stage: Stage, max_pages: int):
        super().__init__(
            "Pagination limit exceeded",
            details=f"Upstream still reported a next page after {max_pages} pages",
        )
        self.stage = stage
        self.max_pages = max_pages


class RecordingNotFoundError(GatewayError):
    status_code = 404
    message = "Recording not found"
    hint: Optional[str] = None

    def __init__(self, call_id: str):
        super().__init__(self.message, details=self.hint)
        self.call_id = call_id


class NoAudioAssetsError(RecordingNotFoundError):
    message = "No audio files found for this call"
    hint = "The recording may still be processing"


class NoRecordingAssetError(RecordingNotFoundError):
    message = "No recording found for this call"
    hint = "The call may only have voicemail or other audio types"


class NoSelfLinkError(RecordingNotFoundError):
    message = "No audio URL found in recording data"
    hint = "The recording links may be malformed or missing"


async def gateway_exception_handler(request: Request, exc: GatewayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"HTTP {exc.status_code}: {request.method} {request.url.path} - {exc.error}")
    else:
        logger.warning(f"HTTP {exc.status_code}: {request.method} {request.url.path} - {exc.error}")
    return error_response(exc.status_code, exc.to_content())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Validation error: {request.method} {request.url.path}")
    return error_response(400, {"error": "Validation failed", "details": str(exc.errors())})


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Routing errors (404, 405) raised by the framework itself"""
    logger.warning(f"HTTP {exc.status_code}: {request.method} {request.url.path} - {exc.detail}")
    return error_response(exc.status_code, {"error": str(exc.detail)}, headers=getattr(exc, "headers", None))


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded: {request.method} {request.url.path}")
    return error_response(429, {"error": "Rate limit exceeded", "details": str(exc.detail)})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log full error, return the exception message in the envelope"""
    request_id = str(uuid.uuid4())

    logger.error(
        f"Request failed: {request.method} {request.url.path}",
        extra={
            "request_id": request_id,
            "error": str(exc),
            "error_type": type(exc).__name__,
            "traceback": traceback.format_exc()
        }
    )

    return error_response(500, {"error": str(exc) or "Internal server error", "request_id": request_id})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers"""
    app.add_exception_handler(GatewayError, gateway_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
