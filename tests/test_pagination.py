"""
Tests for the pagination walker - flattening, termination and the page bound.
"""

import pytest

from gateway.constants import Stage
from gateway.exceptions import PaginationLimitError, UpstreamError
from gateway.services.pagination import next_page_url, walk_pages
from conftest import FakeUpstream


def page(items, next_url=None):
    links = {"next": next_url} if next_url is not None else {}
    return {"data": items, "meta": {"pagination": {"links": links}}}


class TestNextPageUrl:

    def test_present(self):
        assert next_page_url(page([], "https://x/users?page=2")) == "https://x/users?page=2"

    @pytest.mark.parametrize("payload", [
        {},
        {"meta": None},
        {"meta": {"pagination": {"links": {"next": ""}}}},
        {"meta": {"pagination": {"links": {"next": None}}}},
        {"meta": {"pagination": "nope"}},
        [],
    ])
    def test_absent_or_empty(self, payload):
        assert next_page_url(payload) is None


class TestWalkPages:

    @pytest.mark.asyncio
    async def test_concatenates_every_page(self):
        client = FakeUpstream({
            "/users": page([1, 2], "https://x/users?page=2"),
            "https://x/users?page=2": page([3], "https://x/users?page=3"),
            "https://x/users?page=3": page([4, 5, 6]),
        })

        items = await walk_pages(client, "/users", Stage.PRESENCE)

        assert items == [1, 2, 3, 4, 5, 6]
        assert client.paths() == ["/users", "https://x/users?page=2", "https://x/users?page=3"]

    @pytest.mark.asyncio
    async def test_missing_or_non_list_data_counts_as_empty(self):
        client = FakeUpstream({
            "/users": {"meta": {"pagination": {"links": {"next": "https://x/p2"}}}},
            "https://x/p2": {"data": {"not": "a list"}, "meta": {"pagination": {"links": {"next": "https://x/p3"}}}},
            "https://x/p3": page(["a"]),
        })

        assert await walk_pages(client, "/users", Stage.PRESENCE) == ["a"]

    @pytest.mark.asyncio
    async def test_failure_discards_partial_pages(self):
        client = FakeUpstream({
            "/users": page([1, 2], "https://x/p2"),
            "https://x/p2": UpstreamError(Stage.PRESENCE, 502, "bad gateway"),
        })

        with pytest.raises(UpstreamError) as exc_info:
            await walk_pages(client, "/users", Stage.PRESENCE)

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "bad gateway"

    @pytest.mark.asyncio
    async def test_endless_next_chain_hits_page_bound(self):
        # Provider keeps pointing at itself
        client = FakeUpstream({"/users": page([1], "/users")})

        with pytest.raises(PaginationLimitError) as exc_info:
            await walk_pages(client, "/users", Stage.PRESENCE, max_pages=3)

        assert len(client.calls) == 3
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_exactly_max_pages_is_allowed(self):
        client = FakeUpstream({
            "/users": page([1], "/p2"),
            "/p2": page([2]),
        })

        assert await walk_pages(client, "/users", Stage.PRESENCE, max_pages=2) == [1, 2]
