"""Active-user presence endpoint (cached for five seconds per process)."""
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from loguru import logger

from gateway.cache import PresenceCache
from gateway.dependencies import get_presence_cache, get_telephony_client
from gateway.envelope import json_response, preflight_response
from gateway.exceptions import GatewayError, InternalError
from gateway.services.presence import get_active_users
from gateway.services.upstream import UpstreamClient

router = APIRouter()


@router.options("/xon-proxy", include_in_schema=False)
async def presence_preflight() -> Response:
    return preflight_response()


@router.api_route("/xon-proxy", methods=["GET", "POST"])
async def list_active_presence(
    client: UpstreamClient = Depends(get_telephony_client),
    cache: PresenceCache = Depends(get_presence_cache),
) -> JSONResponse:
    """Users whose presence is anything other than LOGGED_OUT."""
    try:
        result = await get_active_users(client, cache)
    except GatewayError:
        raise
    except Exception as e:
        logger.exception("xon-proxy error")
        raise InternalError("Internal server error", details=str(e)) from e

    return json_response({
        "data": [user.model_dump() for user in result.users],
        "total_users_fetched": result.total_fetched,
        "active_users": len(result.users),
        "cached": result.cached,
    })
