"""Uniform JSON envelope and CORS headers shared by every endpoint."""
from typing import Any, Dict, Optional

from fastapi import Response
from fastapi.responses import JSONResponse

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}


def json_response(
    content: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    merged = {**CORS_HEADERS, **(headers or {})}
    # JSONResponse sets Content-Type: application/json
    return JSONResponse(status_code=status_code, content=content, headers=merged)


def error_response(
    status_code: int,
    content: Dict[str, Any],
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    return json_response(content, status_code=status_code, headers=headers)


def preflight_response() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)
