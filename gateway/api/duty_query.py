"""Duty doctor query generation from a call recording"""
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from gateway.config import DUTY_QUERY_RATE_LIMIT
from gateway.dependencies import get_duty_query_pipeline, limiter
from gateway.envelope import json_response, preflight_response
from gateway.exceptions import GatewayError, InternalError, InvalidRequestError
from gateway.schemas import DutyQueryRequest, DutyQueryResponse, ErrorResponse
from gateway.services.duty_query import DutyQueryPipeline

router = APIRouter()


@router.options("/generate-duty-query", include_in_schema=False)
async def duty_query_preflight() -> Response:
    return preflight_response()


@router.post(
    "/generate-duty-query",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
@limiter.limit(DUTY_QUERY_RATE_LIMIT)
async def generate_duty_query(
    request: Request,
    pipeline: DutyQueryPipeline = Depends(get_duty_query_pipeline),
) -> JSONResponse:
    """Resolve, download, transcribe and summarize a call recording."""
    try:
        body = await request.json()
        try:
            payload = DutyQueryRequest.model_validate(body if isinstance(body, dict) else {})
        except ValidationError as e:
            raise InvalidRequestError("callId is required", details=str(e)) from e

        if not payload.call_id:
            raise InvalidRequestError("callId is required")

        result = await pipeline.run(payload.call_id)
    except GatewayError:
        raise
    except Exception as e:
        logger.exception("Error in generate-duty-query")
        raise InternalError(str(e) or "Unknown error", details="Failed to generate duty doctor query") from e

    response = DutyQueryResponse(
        transcript=result.transcript,
        duty_query=result.duty_query,
        call_id=payload.call_id,
    )
    return json_response(response.model_dump(by_alias=True), headers={"Cache-Control": "no-cache"})
