from datetime import datetime
from typing import List, Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.models.common import MAX_INTERESTED_GENRES, Genre
from app.schemas.base import RequestModel, ResponseModel

USERNAME_PATTERN = r"^[A-Za-z0-9_.]+$"


class SignupRequest(RequestModel):
    username: str = Field(min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)
    interested_genres: List[Genre] = Field(default_factory=list, max_length=MAX_INTERESTED_GENRES)


class ProfileUpdateRequest(RequestModel):
    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)
    avatar: Optional[str] = None
    interested_genres: Optional[List[Genre]] = Field(default=None, max_length=MAX_INTERESTED_GENRES)


class UserOut(ResponseModel):
    """Profile as returned to clients. The Firebase uid is never exposed."""

    id: PydanticObjectId
    username: str
    display_name: str
    email: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None
    interested_genres: List[Genre] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
