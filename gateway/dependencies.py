"""Dependency injection providers for FastAPI"""
import os
from fastapi import Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from gateway.cache import PresenceCache
from gateway.config import (
    OPENAI_API_KEY_VAR,
    OPENAI_BASE_URL,
    RATE_LIMIT_ENABLED,
    XON_API_KEY_VAR,
    XON_BASE_URL,
)
from gateway.exceptions import ConfigurationError
from gateway.services.duty_query import DutyQueryPipeline
from gateway.services.upstream import UpstreamClient

limiter = Limiter(key_func=get_remote_address, enabled=RATE_LIMIT_ENABLED)


def _require_env(name: str, message: str, status_code: int) -> str:
    value = os.getenv(name)
    if not value:
        raise ConfigurationError(message, status_code=status_code)
    return value


# Credentials
def get_xon_api_key() -> str:
    return _require_env(XON_API_KEY_VAR, "XON secret not configured", 500)


def get_call_list_api_key() -> str:
    return _require_env(XON_API_KEY_VAR, "XON API key not configured", 500)


# Shared state created in the lifespan
def get_http_session(request: Request):
    return request.app.state.http_session


def get_presence_cache(request: Request) -> PresenceCache:
    return request.app.state.presence_cache


# Upstream clients
def get_telephony_client(request: Request, api_key: str = Depends(get_xon_api_key)) -> UpstreamClient:
    return UpstreamClient(get_http_session(request), api_key, XON_BASE_URL, name="x-on")


def get_call_list_client(request: Request, api_key: str = Depends(get_call_list_api_key)) -> UpstreamClient:
    return UpstreamClient(get_http_session(request), api_key, XON_BASE_URL, name="x-on")


def get_duty_query_pipeline(request: Request) -> DutyQueryPipeline:
    """OpenAI key is checked first, then X-on; both before any network call."""
    openai_key = _require_env(OPENAI_API_KEY_VAR, "OpenAI API key not configured", 400)
    xon_key = _require_env(XON_API_KEY_VAR, "X-on API key not configured", 400)

    session = get_http_session(request)
    telephony = UpstreamClient(session, xon_key, XON_BASE_URL, name="x-on")
    ai = UpstreamClient(session, openai_key, OPENAI_BASE_URL, name="openai")
    return DutyQueryPipeline(telephony=telephony, ai=ai)
