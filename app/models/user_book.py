"""
UserBook: a book authored on the platform. Its chapters live in their own
collection (app.models.chapter) and reference the book by id.
"""

from typing import List, Optional

from beanie import Indexed, PydanticObjectId
from pydantic import Field

from app.models.common import Genre, TimestampedDocument, Visibility


class UserBook(TimestampedDocument):
    author: Indexed(PydanticObjectId)
    title: str = Field(max_length=500)
    synopsis: Optional[str] = Field(default=None, max_length=1000)
    genres: List[Genre] = Field(default_factory=list)
    visibility: Visibility = Visibility.PRIVATE
    cover_image: Optional[str] = None
    is_completed: bool = False
    likes: List[PydanticObjectId] = Field(default_factory=list)

    class Settings:
        name = "userbooks"
        use_state_management = True
