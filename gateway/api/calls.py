"""Recent call list endpoint"""
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from gateway.dependencies import get_call_list_client
from gateway.envelope import json_response, preflight_response
from gateway.exceptions import GatewayError, InternalError, InvalidRequestError
from gateway.schemas import CallListRequest
from gateway.services.calls import list_recent_calls
from gateway.services.upstream import UpstreamClient

router = APIRouter()


async def _read_optional_json(request: Request) -> Dict[str, Any]:
    """Absent or malformed bodies mean 'use the defaults'."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.options("/xon-calls", include_in_schema=False)
async def calls_preflight() -> Response:
    return preflight_response()


@router.api_route("/xon-calls", methods=["POST", "GET"])
async def list_calls(
    request: Request,
    client: UpstreamClient = Depends(get_call_list_client),
) -> JSONResponse:
    body = await _read_optional_json(request)
    try:
        filters = CallListRequest.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError("Invalid call list request", details=str(e)) from e

    try:
        payload = await list_recent_calls(client, filters)
    except GatewayError:
        raise
    except Exception as e:
        logger.exception("Error in xon-calls")
        raise InternalError(str(e), details="Failed to fetch calls from X-on API") from e

    return json_response(payload)
