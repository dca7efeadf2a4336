"""
Enums and small helpers shared by the document models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict

from beanie import Document
from pydantic import Field


class Visibility(str, Enum):
    """Who can see a piece of content."""

    PUBLIC = "public"
    PRIVATE = "private"
    FRIENDS = "friends"


class ReadingStatus(str, Enum):
    """Progression of a book on a reading list. Not enforced to be monotonic."""

    INTERESTED = "interested"
    READING = "reading"
    COMPLETED = "completed"


class Genre(str, Enum):
    FICTION = "fiction"
    NON_FICTION = "non-fiction"
    FANTASY = "fantasy"
    SCI_FI = "sci-fi"
    MYSTERY = "mystery"
    ROMANCE = "romance"
    THRILLER = "thriller"
    HISTORY = "history"
    HISTORICAL = "historical"
    BIOGRAPHY = "biography"
    POETRY = "poetry"
    SELF_HELP = "self-help"
    HORROR = "horror"
    DRAMA = "drama"
    DYSTOPIAN = "dystopian"
    ADVENTURE = "adventure"
    COMEDY = "comedy"
    SPIRITUALITY = "spirituality"
    LITERARY = "literary"
    LITERATURE = "literature"
    READING = "reading"
    LIFESTYLE = "lifestyle"
    CONTEMPORARY = "contemporary"
    DIVERSITY = "diversity"
    PHILOSOPHY = "philosophy"
    SCIENCE = "science"
    TIMELESS = "timeless"
    PSYCHOLOGY = "psychology"
    MODERN = "modern"
    YOUNG_ADULT = "young-adult"
    CHILDREN = "children"
    CLASSIC = "classic"
    GRAPHIC_NOVEL = "graphic-novel"
    MEMOIR = "memoir"
    EDUCATION = "education"
    COMMUNITY = "community"
    OTHERS = "others"


MAX_INTERESTED_GENRES = 5


class TimestampedDocument(Document):
    """
    Base for every owned document: created_at on insert, updated_at on each patch.
    """

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    async def patch(self, fields: Dict[str, Any]) -> None:
        """Apply a single atomic $set of the given fields and bump updated_at."""
        await self.set({**fields, "updated_at": datetime.utcnow()})
