from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.models.chapter import ChapterVisibility
from app.models.common import Genre, Visibility
from app.schemas.base import AuthorOut, RequestModel, ResponseModel


class UserBookCreate(RequestModel):
    title: str = Field(min_length=1, max_length=500)
    synopsis: Optional[str] = Field(default=None, max_length=1000)
    genres: List[Genre] = Field(default_factory=list)
    visibility: Visibility = Visibility.PRIVATE
    cover_image: Optional[str] = None


class UserBookUpdate(RequestModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=500)
    synopsis: Optional[str] = Field(default=None, max_length=1000)
    genres: Optional[List[Genre]] = None
    visibility: Optional[Visibility] = None
    cover_image: Optional[str] = None
    is_completed: Optional[bool] = None


class ChapterSummaryOut(ResponseModel):
    id: PydanticObjectId
    title: str
    chapter_number: int
    visibility: ChapterVisibility
    word_count: int
    created_at: datetime


class UserBookOut(ResponseModel):
    id: PydanticObjectId
    author: PydanticObjectId
    owner: Optional[AuthorOut] = None
    title: str
    synopsis: Optional[str] = None
    genres: List[Genre] = Field(default_factory=list)
    visibility: Visibility
    cover_image: Optional[str] = None
    is_completed: bool
    like_count: int = 0
    chapter_count: Optional[int] = None
    total_word_count: Optional[int] = None
    chapters: Optional[List[ChapterSummaryOut]] = None
    created_at: datetime
    updated_at: datetime


class LikeOut(ResponseModel):
    liked: bool
    like_count: int
