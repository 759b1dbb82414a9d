from typing import Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse
from loguru import logger

from gateway.constants import QUEUE_NOTE
from gateway.dependencies import get_telephony_client
from gateway.envelope import json_response, preflight_response
from gateway.exceptions import GatewayError, InternalError
from gateway.services.queue import get_queue_snapshot, parse_match_numbers
from gateway.services.upstream import UpstreamClient

router = APIRouter()


@router.options("/xon-queue-live", include_in_schema=False)
async def queue_preflight() -> Response:
    return preflight_response()


@router.api_route("/xon-queue-live", methods=["GET", "POST"])
async def queue_snapshot(
    match: Optional[str] = Query(None, description="Comma-separated phone numbers"),
    client: UpstreamClient = Depends(get_telephony_client),
) -> JSONResponse:
    """Queue depth per group, limited to groups with calls waiting."""
    match_numbers = parse_match_numbers(match)

    try:
        snapshot = await get_queue_snapshot(client, match_numbers)
    except GatewayError:
        raise
    except Exception as e:
        logger.exception("xon-queue-live error")
        raise InternalError("Internal server error", details=str(e)) from e

    return json_response({**snapshot.model_dump(), "note": QUEUE_NOTE})
