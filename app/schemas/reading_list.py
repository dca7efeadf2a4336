from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.models.common import ReadingStatus, Visibility
from app.schemas.base import RequestModel, ResponseModel


class ReadingListCreate(RequestModel):
    volume_id: str = Field(min_length=1, max_length=100)
    status: ReadingStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    visibility: Visibility = Visibility.PUBLIC


class ReadingListUpdate(RequestModel):
    """Partial update; an explicit null clears a timestamp."""

    status: Optional[ReadingStatus] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    visibility: Optional[Visibility] = None


class ReadingListItemOut(ResponseModel):
    id: PydanticObjectId
    user: PydanticObjectId
    volume_id: str
    status: ReadingStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    visibility: Visibility
    created_at: datetime
    updated_at: datetime
