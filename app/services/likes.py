"""
Atomic like/unlike toggle shared by user books and chapters.
"""

from typing import Tuple, Type

from beanie import Document, PydanticObjectId, UpdateResponse

from app.errors import NotFound


async def toggle_like(model: Type[Document], doc_id: PydanticObjectId, user_id: PydanticObjectId) -> Tuple[bool, int]:
    """
    Like if not yet liked, otherwise unlike. Each branch is one atomic update
    whose filter decides which branch applies. Returns (liked, like_count).
    """
    liked = await model.find_one({"_id": doc_id, "likes": {"$ne": user_id}}).update(
        {"$addToSet": {"likes": user_id}},
        response_type=UpdateResponse.NEW_DOCUMENT,
    )
    if liked is not None:
        return True, len(liked.likes)

    unliked = await model.find_one({"_id": doc_id}).update(
        {"$pull": {"likes": user_id}},
        response_type=UpdateResponse.NEW_DOCUMENT,
    )
    if unliked is None:
        raise NotFound()
    return False, len(unliked.likes)
