"""
User model for MongoDB (Beanie ODM).

Identity lives in Firebase; this is the application profile bound to it.
The uid binding is written once at signup and never changed afterwards.
"""

from typing import List, Optional

import pymongo
from beanie import Indexed
from pydantic import Field
from pymongo import IndexModel

from app.models.common import Genre, TimestampedDocument


class User(TimestampedDocument):
    """
    Application user. id is MongoDB ObjectId; uid links to the Firebase account.
    """

    uid: Indexed(str, unique=True)  # Firebase "sub" / "user_id" claim
    email: Optional[str] = None
    username: Indexed(str, unique=True)
    display_name: str
    avatar: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    interested_genres: List[Genre] = Field(default_factory=list)

    class Settings:
        name = "users"
        use_state_management = True
        indexes = [
            # profiles without an email do not collide
            IndexModel(
                [("email", pymongo.ASCENDING)],
                unique=True,
                partialFilterExpression={"email": {"$type": "string"}},
            ),
        ]

    class Config:
        json_schema_extra = {
            "example": {
                "uid": "firebase-uid",
                "email": "reader@example.com",
                "username": "reader",
                "display_name": "Avid Reader",
                "interested_genres": ["fantasy", "mystery"],
            }
        }
