from enum import Enum
from typing import List

import pymongo
from beanie import Indexed, PydanticObjectId
from pydantic import Field
from pymongo import IndexModel

from app.models.common import TimestampedDocument


class ChapterVisibility(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


class Chapter(TimestampedDocument):
    """
    One chapter of a UserBook. Chapter numbers are unique per book; a chapter
    cannot be public while its book is private.
    """

    book: Indexed(PydanticObjectId)
    author: PydanticObjectId
    title: str = Field(max_length=200)
    content: str = Field(max_length=50_000)
    chapter_number: int = Field(ge=1)
    visibility: ChapterVisibility = ChapterVisibility.PRIVATE
    word_count: int = 0
    likes: List[PydanticObjectId] = Field(default_factory=list)

    class Settings:
        name = "chapters"
        use_state_management = True
        indexes = [
            IndexModel(
                [("book", pymongo.ASCENDING), ("chapter_number", pymongo.ASCENDING)],
                unique=True,
            ),
        ]


def calculate_word_count(content: str) -> int:
    return len(content.split())
