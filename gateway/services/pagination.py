from typing import Any, List, Optional

from loguru import logger

from gateway.config import PAGINATION_MAX_PAGES
from gateway.constants import Stage
from gateway.exceptions import PaginationLimitError


def next_page_url(page: Any) -> Optional[str]:
    """Return meta.pagination.links.next when it is a non-empty string."""
    node = page
    for key in ("meta", "pagination", "links", "next"):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    if isinstance(node, str) and node:
        return node
    return None


def page_items(page: Any) -> List[Any]:
    data = page.get("data") if isinstance(page, dict) else None
    return data if isinstance(data, list) else []


async def walk_pages(client, seed_url: str, stage: Stage, max_pages: int = PAGINATION_MAX_PAGES) -> List[Any]:
    """
    Follow next-page links from seed_url and return every page's `data`, flattened.

    Raises:
        UpstreamError: on the first non-2xx page; pages already read are dropped.
        PaginationLimitError: if a next link is still present after max_pages pages.
    """
    items: List[Any] = []
    page_url: Optional[str] = seed_url
    pages = 0

    while page_url:
        if pages >= max_pages:
            logger.error(f"Pagination bound hit after {pages} pages ({stage.value})")
            raise PaginationLimitError(stage, max_pages)

        page = await client.get_json(page_url, stage)
        pages += 1
        items.extend(page_items(page))
        page_url = next_page_url(page)

    logger.debug(f"Walked {pages} page(s), {len(items)} item(s) ({stage.value})")
    return items
