"""
Ownership checks for user-owned documents.
"""

from typing import Optional

from beanie import PydanticObjectId

from app.errors import Forbidden
from app.models.user import User


def check_owner(owner_id: Optional[PydanticObjectId], user: Optional[User]) -> bool:
    if owner_id is None or user is None or user.id is None:
        return False
    return str(owner_id) == str(user.id)


def ensure_owner(owner_id: PydanticObjectId, user: User, message: str) -> None:
    """Raise Forbidden unless user owns the entity. Called by every mutating handler."""
    if not check_owner(owner_id, user):
        raise Forbidden(message)
