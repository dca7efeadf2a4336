"""
Profile APIs: the caller's own profile with recent activity, edits, and
other users' public profiles.
"""

import logging

from beanie import PydanticObjectId
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import NotFound, ValidationFailed
from app.models.blog import Blog
from app.models.collection import Collection
from app.models.common import Visibility
from app.models.reading_list import ReadingListItem
from app.models.user import User
from app.schemas.blog import BlogOut
from app.schemas.collection import CollectionOut
from app.schemas.reading_list import ReadingListItemOut
from app.schemas.user import ProfileUpdateRequest, UserOut

logger = logging.getLogger(__name__)
router = APIRouter()

PREVIEW_LIMIT = 5


async def _activity(user_id: PydanticObjectId, public_only: bool) -> dict:
    """Most recently updated collections, reading items and blogs of a user."""
    extra = {"visibility": Visibility.PUBLIC.value} if public_only else {}
    collections = (
        await Collection.find({"user": user_id, **extra}).sort(-Collection.updated_at).limit(PREVIEW_LIMIT).to_list()
    )
    reading = (
        await ReadingListItem.find({"user": user_id, **extra})
        .sort(-ReadingListItem.updated_at)
        .limit(PREVIEW_LIMIT)
        .to_list()
    )
    blogs = await Blog.find({"user": user_id, **extra}).sort(-Blog.updated_at).limit(PREVIEW_LIMIT).to_list()
    return {
        "collections": [CollectionOut.model_validate(c) for c in collections],
        "readingTracker": [ReadingListItemOut.model_validate(r) for r in reading],
        "blogs": [BlogOut.model_validate(b) for b in blogs],
    }


@router.get("/me", summary="Current user's profile and recent activity")
async def get_current_profile(current_user: CurrentUser) -> JSONResponse:
    data = {"profileData": UserOut.model_validate(current_user)}
    data.update(await _activity(current_user.id, public_only=False))
    return send_success("Profile data fetched successfully", data)


@router.patch("/me", summary="Edit the current user's profile")
async def update_current_profile(payload: ProfileUpdateRequest, current_user: CurrentUser) -> JSONResponse:
    changes = {key: value for key, value in payload.changes().items() if key == "bio" or value is not None}
    if not changes:
        raise ValidationFailed("No valid fields provided for update")
    await current_user.patch(changes)
    logger.info("Updated profile of user %s: %s", current_user.id, sorted(changes))
    return send_success("Profile updated successfully", {"profileData": UserOut.model_validate(current_user)})


@router.get("/{user_id}", summary="Public profile of another user")
async def get_public_profile(user_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    user = await User.get(user_id)
    if not user:
        raise NotFound("User not found")
    data = {"profileData": UserOut.model_validate(user).model_copy(update={"email": None})}
    data.update(await _activity(user.id, public_only=True))
    return send_success("Profile data fetched successfully", data)
