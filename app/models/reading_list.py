"""
Reading list items: one user's relationship to one external book volume.
"""

from datetime import datetime
from typing import Optional

import pymongo
from beanie import Indexed, PydanticObjectId
from pymongo import IndexModel

from app.models.common import ReadingStatus, TimestampedDocument, Visibility


class ReadingListItem(TimestampedDocument):
    """
    status=reading|completed requires started_at; completed also requires
    completed_at, which may not precede started_at. Checked in
    app.services.reading_list_rules before any write.
    """

    user: Indexed(PydanticObjectId)
    volume_id: str  # Google Books volume id, opaque
    status: ReadingStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    visibility: Visibility = Visibility.PUBLIC

    class Settings:
        name = "reading_lists"
        use_state_management = True
        indexes = [
            IndexModel(
                [("user", pymongo.ASCENDING), ("volume_id", pymongo.ASCENDING)],
                unique=True,
            ),
        ]
