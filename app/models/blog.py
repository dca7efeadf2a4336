from typing import List

from beanie import Indexed, PydanticObjectId
from pydantic import Field

from app.models.common import Genre, TimestampedDocument, Visibility


class Blog(TimestampedDocument):
    """Markdown blog post written by a user."""

    user: Indexed(PydanticObjectId)
    title: str
    content: str
    visibility: Visibility = Visibility.PUBLIC
    spoiler_alert: bool
    genres: List[Genre] = Field(default_factory=list)

    class Settings:
        name = "blogs"
        use_state_management = True
