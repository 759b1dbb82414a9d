from typing import Any, Dict

from loguru import logger

from gateway.constants import Stage
from gateway.schemas import CallListRequest


def build_call_filters(request: CallListRequest) -> Dict[str, str]:
    filters = {
        "account_scope": request.account_scope,
        "start_date": request.start_date,
        "end_date": request.end_date,
    }
    return {key: value for key, value in filters.items() if value}


async def list_recent_calls(client, request: CallListRequest) -> Dict[str, Any]:
    """Fetch the call list and truncate its `data` to request.limit, keeping every other field."""
    params = build_call_filters(request)
    payload = await client.get_json("/calls", Stage.CALL_LIST, params=params or None)
    if not isinstance(payload, dict):
        payload = {}

    data = payload.get("data")
    calls = data if isinstance(data, list) else []
    logger.info(f"Call list fetched: {len(calls)} call(s), returning up to {request.limit}")
    return {**payload, "data": calls[:request.limit]}
