"""Live queue snapshot from the groups listing."""

from numbers import Number
from typing import Any, Dict, List, Optional

from loguru import logger

from gateway.constants import Stage
from gateway.schemas import QueueGroup, QueueSnapshot

GROUPS_WITH_QUEUE_PATH = "/groups?includes=queue"


def parse_match_numbers(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def _queue_data(group: Any) -> Dict[str, Any]:
    if not isinstance(group, dict):
        return {}
    queue = group.get("queue")
    data = queue.get("data") if isinstance(queue, dict) else None
    return data if isinstance(data, dict) else {}


def _queue_size(group: Any) -> Optional[Number]:
    size = _queue_data(group).get("size")
    if isinstance(size, bool) or not isinstance(size, (int, float)):
        return None
    return size if size > 0 else None


def build_queue_snapshot(groups: List[Any]) -> QueueSnapshot:
    queued_groups = []
    for group in groups:
        size = _queue_size(group)
        if size is None:
            continue
        data = _queue_data(group)
        queued_groups.append(QueueGroup(
            group_id=group.get("id"),
            group_name=group.get("name"),
            queue_size=size,
            queue_oldest=data.get("oldest") or None,
            queue_max_wait=data.get("max_wait") or None,
            queue_max_size=data.get("max_size") or None,
        ))

    return QueueSnapshot(
        total_groups_checked=len(groups),
        groups_with_queue=len(queued_groups),
        total_queued=sum(g.queue_size for g in queued_groups),
        queued_groups=queued_groups,
    )


async def get_queue_snapshot(client, match_numbers: List[str]) -> QueueSnapshot:
    # TODO: filter queued_groups by match_numbers once X-on exposes caller numbers per queue entry
    if match_numbers:
        logger.debug(f"Queue snapshot requested for {len(match_numbers)} match number(s); not applied")

    payload = await client.get_json(GROUPS_WITH_QUEUE_PATH, Stage.QUEUE, default={})
    data = payload.get("data") if isinstance(payload, dict) else None
    groups = data if isinstance(data, list) else []

    snapshot = build_queue_snapshot(groups)
    logger.info(f"Queue snapshot: {snapshot.groups_with_queue}/{snapshot.total_groups_checked} groups queued, "
                f"{snapshot.total_queued} calls waiting")
    return snapshot
