"""Active-user presence list, read through the per-process PresenceCache."""

from dataclasses import dataclass
from typing import Any, Dict, List

from loguru import logger

from gateway.cache import PresenceCache
from gateway.config import USERS_PAGE_SIZE
from gateway.constants import PRESENCE_SCOPE_ALL, PresenceStatus, Stage
from gateway.schemas import ActiveUser
from gateway.services.pagination import walk_pages


@dataclass(frozen=True)
class PresenceSnapshot:
    users: List[ActiveUser]
    total_fetched: int


@dataclass(frozen=True)
class ActiveUsersResult:
    users: List[ActiveUser]
    total_fetched: int
    cached: bool


def is_active(user: Any) -> bool:
    if not isinstance(user, dict):
        return False
    status = user.get("status")
    return bool(status) and status != PresenceStatus.LOGGED_OUT.value


def project_user(user: Dict[str, Any]) -> ActiveUser:
    return ActiveUser(
        id=user.get("id"),
        name=user.get("name") or user.get("email") or "Unknown",
        status=user["status"],
        email=user.get("email"),
        numbers=user.get("numbers"),
        active_number=user.get("active_number"),
    )


async def fetch_presence(client) -> PresenceSnapshot:
    users = await walk_pages(client, f"/users?per_page={USERS_PAGE_SIZE}", Stage.PRESENCE)
    active = [project_user(u) for u in users if is_active(u)]
    logger.info(f"Presence fetched: {len(users)} users, {len(active)} active")
    return PresenceSnapshot(users=active, total_fetched=len(users))


async def get_active_users(client, cache: PresenceCache, scope: str = PRESENCE_SCOPE_ALL) -> ActiveUsersResult:
    snapshot, cached = await cache.get_or_refresh(scope, lambda: fetch_presence(client))
    return ActiveUsersResult(users=snapshot.users, total_fetched=snapshot.total_fetched, cached=cached)
