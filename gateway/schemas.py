from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, List, Union


class ActiveUser(BaseModel):
    id: Any = None
    name: Any
    status: Any
    email: Any = None
    numbers: Any = None
    active_number: Any = None


class QueueGroup(BaseModel):
    group_id: Any = None
    group_name: Optional[str] = None
    queue_size: Union[int, float]
    queue_oldest: Any = None
    queue_max_wait: Any = None
    queue_max_size: Any = None


class QueueSnapshot(BaseModel):
    total_groups_checked: int
    groups_with_queue: int
    total_queued: Union[int, float]
    queued_groups: List[QueueGroup]


class CallListRequest(BaseModel):
    limit: int = Field(default=5, ge=0)
    account_scope: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class DutyQueryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    call_id: Optional[Union[str, int]] = Field(default=None, alias="callId")


class DutyQueryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    transcript: str
    duty_query: str = Field(alias="dutyQuery")
    call_id: Union[str, int] = Field(alias="callId")


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
