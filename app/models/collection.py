"""
Collection model: a named, user-owned ordered set of book references.

BookRef is embedded (no separate collection). Adding and removing books is
done with single-document atomic updates in app.services.collections.
"""

from datetime import datetime
from typing import List, Optional

from beanie import Indexed, PydanticObjectId
from pydantic import BaseModel, Field

from app.models.common import TimestampedDocument, Visibility


class BookRef(BaseModel):
    """One book inside a collection."""

    volume_id: str = Field(max_length=100)
    added_at: datetime = Field(default_factory=datetime.utcnow)


class Collection(TimestampedDocument):
    user: Indexed(PydanticObjectId)
    title: str
    description: Optional[str] = Field(default="", max_length=200)
    books: List[BookRef] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    visibility: Visibility = Visibility.PUBLIC

    class Settings:
        name = "collections"
        use_state_management = True

    class Config:
        json_schema_extra = {
            "example": {
                "title": "Summer reads",
                "description": "Light books for the beach",
                "books": [{"volume_id": "zyTCAlFPjgYC"}],
                "tags": ["summer"],
                "visibility": "public",
            }
        }
