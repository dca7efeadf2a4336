"""
Discussion threads and their comments.

Comments are threaded one level deep: a reply's parent must be a top-level
comment of the same discussion.
"""

from enum import Enum
from typing import List, Optional

from beanie import Indexed, PydanticObjectId
from pydantic import Field

from app.models.common import Genre, TimestampedDocument


class DiscussionVisibility(str, Enum):
    PUBLIC = "public"
    FRIENDS = "friends"


class Discussion(TimestampedDocument):
    user: Indexed(PydanticObjectId)
    title: str
    content: str
    topic: Optional[str] = None
    visibility: DiscussionVisibility = DiscussionVisibility.PUBLIC
    spoiler_alert: bool
    genres: List[Genre] = Field(default_factory=list)

    class Settings:
        name = "discussions"
        use_state_management = True


class Comment(TimestampedDocument):
    discussion: Indexed(PydanticObjectId)
    user: PydanticObjectId
    content: str = Field(max_length=500)
    spoiler_alert: bool
    parent_comment: Optional[PydanticObjectId] = None  # None for top-level comments

    class Settings:
        name = "comments"
        use_state_management = True
