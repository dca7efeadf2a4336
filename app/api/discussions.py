"""
Discussion APIs. Only public discussions are listed and readable by others.
"""

import logging
import re
from typing import List, Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import NotFound, ValidationFailed
from app.models.discussion import Comment, Discussion, DiscussionVisibility
from app.models.user import User
from app.schemas.discussion import DiscussionCreate, DiscussionOut, DiscussionUpdate
from app.services.authors import author_previews
from app.services.ownership import check_owner, ensure_owner

logger = logging.getLogger(__name__)
router = APIRouter()

LIST_LIMIT = 20


async def _present(discussions: List[Discussion], include_content: bool = True) -> List[DiscussionOut]:
    owners = await author_previews(d.user for d in discussions)
    out = []
    for discussion in discussions:
        extra = {"owner": owners.get(str(discussion.user))}
        if not include_content:
            extra["content"] = None
        out.append(DiscussionOut.model_validate(discussion).model_copy(update=extra))
    return out


@router.get("", summary="List public discussions")
async def list_discussions(
    current_user: CurrentUser,
    author: Optional[str] = Query(default=None, description="'me' or a user id"),
    search: Optional[str] = None,
) -> JSONResponse:
    filters: dict = {"visibility": DiscussionVisibility.PUBLIC.value}
    if author == "me":
        filters["user"] = current_user.id
    elif author:
        if not PydanticObjectId.is_valid(author) or not await User.get(PydanticObjectId(author)):
            raise NotFound("User not found")
        filters["user"] = PydanticObjectId(author)
    if search:
        filters["title"] = {"$regex": re.escape(search), "$options": "i"}

    discussions = await Discussion.find(filters).sort(-Discussion.updated_at).limit(LIST_LIMIT).to_list()
    return send_success(
        "Discussions fetched successfully",
        {"discussions": await _present(discussions, include_content=False)},
    )


@router.post("", status_code=status.HTTP_201_CREATED, summary="Start a discussion")
async def create_discussion(payload: DiscussionCreate, current_user: CurrentUser) -> JSONResponse:
    discussion = Discussion(user=current_user.id, **payload.model_dump())
    await discussion.insert()
    logger.info("User %s created discussion %s", current_user.id, discussion.id)
    (out,) = await _present([discussion])
    return send_success(
        "Discussion created successfully",
        {"discussion": out},
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{discussion_id}", summary="Get one discussion")
async def get_discussion(discussion_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    discussion = await Discussion.get(discussion_id)
    visible = discussion and (
        discussion.visibility == DiscussionVisibility.PUBLIC or check_owner(discussion.user, current_user)
    )
    if not visible:
        raise NotFound("Discussion not found or not accessible")
    (out,) = await _present([discussion])
    return send_success("Discussion fetched successfully", {"discussion": out})


@router.patch("/{discussion_id}", summary="Edit a discussion")
async def update_discussion(
    discussion_id: PydanticObjectId,
    payload: DiscussionUpdate,
    current_user: CurrentUser,
) -> JSONResponse:
    discussion = await Discussion.get(discussion_id)
    if not discussion:
        raise NotFound("Discussion not found")
    ensure_owner(discussion.user, current_user, "You can only update your own discussions")

    changes = {key: value for key, value in payload.changes().items() if value is not None or key == "topic"}
    if not changes:
        raise ValidationFailed("No valid fields provided for update")
    await discussion.patch(changes)

    (out,) = await _present([discussion])
    return send_success("Discussion updated successfully", {"discussion": out})


@router.delete("/{discussion_id}", summary="Delete a discussion and its comments")
async def delete_discussion(discussion_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    discussion = await Discussion.get(discussion_id)
    if not discussion:
        raise NotFound("Discussion not found")
    ensure_owner(discussion.user, current_user, "You can only delete your own discussions")

    await Comment.find({"discussion": discussion.id}).delete()
    await discussion.delete()
    logger.info("User %s deleted discussion %s", current_user.id, discussion_id)
    return send_success("Discussion deleted successfully")
