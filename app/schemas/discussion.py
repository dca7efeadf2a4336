from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.models.common import Genre
from app.models.discussion import DiscussionVisibility
from app.schemas.base import AuthorOut, RequestModel, ResponseModel


class DiscussionCreate(RequestModel):
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    topic: Optional[str] = None
    visibility: DiscussionVisibility = DiscussionVisibility.PUBLIC
    spoiler_alert: bool
    genres: List[Genre] = Field(default_factory=list)


class DiscussionUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, min_length=1)
    topic: Optional[str] = None
    visibility: Optional[DiscussionVisibility] = None
    spoiler_alert: Optional[bool] = None
    genres: Optional[List[Genre]] = None


class DiscussionOut(ResponseModel):
    id: PydanticObjectId
    user: PydanticObjectId
    owner: Optional[AuthorOut] = None
    title: str
    content: Optional[str] = None
    topic: Optional[str] = None
    visibility: DiscussionVisibility
    spoiler_alert: bool
    genres: List[Genre] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class CommentCreate(RequestModel):
    discussion_id: PydanticObjectId
    content: str = Field(min_length=1, max_length=500)
    spoiler_alert: bool
    parent_comment: Optional[PydanticObjectId] = None


class CommentUpdate(RequestModel):
    content: Optional[str] = Field(default=None, min_length=1, max_length=500)
    spoiler_alert: Optional[bool] = None


class CommentOut(ResponseModel):
    id: PydanticObjectId
    discussion: PydanticObjectId
    user: PydanticObjectId
    owner: Optional[AuthorOut] = None
    content: str
    spoiler_alert: bool
    parent_comment: Optional[PydanticObjectId] = None
    replies: Optional[List["CommentOut"]] = None
    created_at: datetime
    updated_at: datetime
