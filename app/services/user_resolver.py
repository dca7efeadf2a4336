"""
Maps a verified Firebase uid to the application User.
"""

import logging
from typing import Optional

from app.errors import UserNotRegistered
from app.models.user import User

logger = logging.getLogger(__name__)


async def find_user(uid: str) -> Optional[User]:
    return await User.find_one(User.uid == uid)


async def resolve_user(uid: str) -> User:
    """Return the User bound to uid, or raise UserNotRegistered."""
    user = await find_user(uid)
    if user is None:
        logger.info("No registered user for uid=%s", uid)
        raise UserNotRegistered()
    return user
