"""
Batch lookup of author previews for content listings.

Owner references are stored as plain ObjectIds; this replaces per-document
populate calls with one $in query.
"""

from typing import Dict, Iterable

from beanie import PydanticObjectId
from beanie.operators import In

from app.models.user import User
from app.schemas.base import AuthorOut


async def author_previews(user_ids: Iterable[PydanticObjectId]) -> Dict[str, AuthorOut]:
    ids = list({uid for uid in user_ids if uid is not None})
    if not ids:
        return {}
    users = await User.find(In(User.id, ids)).to_list()
    return {str(user.id): AuthorOut.model_validate(user) for user in users}
