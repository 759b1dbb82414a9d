"""
Authenticated HTTP access to the telephony platform and the AI provider.

One UpstreamClient per provider credential; all of them share the
application's aiohttp session. The client knows nothing about business
semantics: it raises UpstreamError for any non-2xx response, tagged with
the stage the caller passes in.
"""

import json
from typing import Any, Dict, Optional

import aiohttp
from loguru import logger

from gateway.constants import Stage
from gateway.exceptions import UpstreamError

_RAISE = object()


class UpstreamClient:
    def __init__(self, session: aiohttp.ClientSession, api_key: str, base_url: str, name: str = "upstream"):
        self.session = session
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.name = name

    def url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, json_body: bool) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.api_key}"}
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(self, method: str, path: str, stage: Stage, json_body: bool = True, **kwargs) -> bytes:
        url = self.url(path)
        async with self.session.request(method, url, headers=self._headers(json_body), **kwargs) as response:
            body = await response.read()
            if not 200 <= response.status < 300:
                text = body.decode("utf-8", errors="replace")
                logger.error(f"{self.name} {method} {url} failed ({stage.value}): {response.status} {text[:200]}")
                raise UpstreamError(stage, response.status, text)
            logger.debug(f"{self.name} {method} {url} -> {response.status} ({len(body)} bytes)")
            return body

    async def get_json(
        self,
        path: str,
        stage: Stage,
        params: Optional[Dict[str, str]] = None,
        default: Any = _RAISE,
    ) -> Any:
        """GET a JSON document. Returns `default` for an unparseable body when one is given."""
        body = await self._request("GET", path, stage, params=params)
        try:
            return json.loads(body) if body else {}
        except ValueError:
            if default is _RAISE:
                raise
            logger.warning(f"{self.name} returned non-JSON body for {path} ({stage.value}), using default")
            return default

    async def get_bytes(self, path: str, stage: Stage) -> bytes:
        return await self._request("GET", path, stage, json_body=False)

    async def post_json(self, path: str, payload: Dict[str, Any], stage: Stage) -> Any:
        body = await self._request("POST", path, stage, json=payload)
        return json.loads(body) if body else {}

    async def post_form(self, path: str, form: aiohttp.FormData, stage: Stage) -> Any:
        # aiohttp sets the multipart Content-Type with its boundary
        body = await self._request("POST", path, stage, json_body=False, data=form)
        return json.loads(body) if body else {}
