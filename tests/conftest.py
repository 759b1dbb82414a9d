"""
Shared fakes for gateway tests - no test touches the network.
"""

import pytest

from gateway.dependencies import limiter


class FakeUpstream:
    """Scripted stand-in for UpstreamClient.

    `replies` maps a path or absolute URL to a value, an exception instance
    (raised), or a zero-argument callable producing either.
    """

    def __init__(self, replies=None):
        self.replies = dict(replies or {})
        self.calls = []

    def paths(self):
        return [call["path"] for call in self.calls]

    def _reply(self, method, path, stage, **extra):
        self.calls.append({"method": method, "path": path, "stage": stage, **extra})
        if path not in self.replies:
            raise AssertionError(f"Unexpected upstream call: {method} {path}")
        reply = self.replies[path]
        if callable(reply):
            reply = reply()
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def get_json(self, path, stage, params=None, default=None):
        return self._reply("GET", path, stage, params=params)

    async def get_bytes(self, path, stage):
        return self._reply("GET", path, stage)

    async def post_json(self, path, payload, stage):
        return self._reply("POST", path, stage, payload=payload)

    async def post_form(self, path, form, stage):
        return self._reply("POST", path, stage, form=form)


class FakeTimer:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float):
        self.now += ms / 1000.0


@pytest.fixture
def fake_timer():
    return FakeTimer()


@pytest.fixture(autouse=True)
def disable_rate_limit():
    previous = limiter.enabled
    limiter.enabled = False
    yield
    limiter.enabled = previous
