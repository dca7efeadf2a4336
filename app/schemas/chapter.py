from datetime import datetime
from typing import Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.models.chapter import ChapterVisibility
from app.schemas.base import AuthorOut, RequestModel, ResponseModel


class ChapterCreate(RequestModel):
    book_id: PydanticObjectId
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=50_000)
    chapter_number: int = Field(ge=1)
    visibility: ChapterVisibility = ChapterVisibility.PRIVATE


class ChapterUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1, max_length=50_000)
    visibility: Optional[ChapterVisibility] = None


class ChapterOut(ResponseModel):
    id: PydanticObjectId
    book: PydanticObjectId
    author: PydanticObjectId
    owner: Optional[AuthorOut] = None
    title: str
    content: Optional[str] = None
    chapter_number: int
    visibility: ChapterVisibility
    word_count: int
    like_count: int = 0
    created_at: datetime
    updated_at: datetime
