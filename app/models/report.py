"""
Content reports filed by users. Review fields are written by moderators
outside this API; reporters only create and list their own reports.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

import pymongo
from beanie import Indexed, PydanticObjectId
from pydantic import Field
from pymongo import IndexModel

from app.models.common import TimestampedDocument


class ReportType(str, Enum):
    COLLECTION = "collection"
    BLOG = "blog"
    DISCUSSION = "discussion"
    COMMENT = "comment"
    USERBOOK = "userbook"
    USER = "user"


class ReportReason(str, Enum):
    SPAM = "spam"
    HARASSMENT = "harassment"
    HATE_SPEECH = "hate_speech"
    VIOLENCE = "violence"
    ADULT_CONTENT = "adult_content"
    COPYRIGHT_VIOLATION = "copyright_violation"
    MISINFORMATION = "misinformation"
    SELF_HARM = "self_harm"
    BULLYING = "bullying"
    IMPERSONATION = "impersonation"
    OTHER = "other"


class ReportStatus(str, Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    ACTION_TAKEN = "action_taken"
    DISMISSED = "dismissed"


class Report(TimestampedDocument):
    reporter: Indexed(PydanticObjectId)
    report_type: ReportType
    target_id: PydanticObjectId
    reason: ReportReason
    description: Optional[str] = Field(default=None, max_length=200)
    status: ReportStatus = ReportStatus.PENDING
    admin_notes: Optional[str] = Field(default=None, max_length=500)
    reviewed_by: Optional[PydanticObjectId] = None
    reviewed_at: Optional[datetime] = None

    class Settings:
        name = "reports"
        use_state_management = True
        indexes = [
            # one report per reporter and target
            IndexModel(
                [
                    ("reporter", pymongo.ASCENDING),
                    ("target_id", pymongo.ASCENDING),
                    ("report_type", pymongo.ASCENDING),
                ],
                unique=True,
            ),
            IndexModel([("status", pymongo.ASCENDING), ("created_at", pymongo.DESCENDING)]),
        ]
