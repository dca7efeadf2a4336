from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.models.common import Genre, Visibility
from app.schemas.base import AuthorOut, RequestModel, ResponseModel


class BlogCreate(RequestModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    visibility: Visibility = Visibility.PUBLIC
    spoiler_alert: bool
    genres: List[Genre] = Field(default_factory=list)


class BlogUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, min_length=1)
    visibility: Optional[Visibility] = None
    spoiler_alert: Optional[bool] = None
    genres: Optional[List[Genre]] = None


class BlogOut(ResponseModel):
    id: PydanticObjectId
    user: PydanticObjectId
    owner: Optional[AuthorOut] = None
    title: str
    content: str
    visibility: Visibility
    spoiler_alert: bool
    genres: List[Genre] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
