"""
Comment APIs. Threads are one level deep: replies point at a top-level
comment of the same discussion.
"""

import logging
from typing import Dict, List

from beanie import PydanticObjectId
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import NotFound, ValidationFailed
from app.models.discussion import Comment, Discussion, DiscussionVisibility
from app.schemas.discussion import CommentCreate, CommentOut, CommentUpdate
from app.services.authors import author_previews
from app.services.ownership import ensure_owner

logger = logging.getLogger(__name__)
router = APIRouter()


async def _public_discussion(discussion_id: PydanticObjectId) -> Discussion:
    discussion = await Discussion.get(discussion_id)
    if not discussion or discussion.visibility != DiscussionVisibility.PUBLIC:
        raise NotFound("Discussion not found or not accessible")
    return discussion


async def _present(comments: List[Comment]) -> List[CommentOut]:
    owners = await author_previews(c.user for c in comments)
    return [CommentOut.model_validate(c).model_copy(update={"owner": owners.get(str(c.user))}) for c in comments]


def build_threads(comments: List[CommentOut]) -> List[CommentOut]:
    """Group replies under their top-level parent, both in the given order."""
    replies: Dict[str, List[CommentOut]] = {}
    for comment in comments:
        if comment.parent_comment is not None:
            replies.setdefault(str(comment.parent_comment), []).append(comment)
    return [
        comment.model_copy(update={"replies": replies.get(str(comment.id), [])})
        for comment in comments
        if comment.parent_comment is None
    ]


@router.get("/{discussion_id}", summary="Threaded comments of a discussion")
async def get_comments_by_discussion(discussion_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    discussion = await _public_discussion(discussion_id)
    # oldest first so threads read top to bottom
    comments = await Comment.find({"discussion": discussion.id}).sort(+Comment.created_at).to_list()
    return send_success(
        "Comments fetched successfully",
        {"comments": build_threads(await _present(comments))},
    )


@router.post("", status_code=status.HTTP_201_CREATED, summary="Comment on a discussion")
async def create_comment(payload: CommentCreate, current_user: CurrentUser) -> JSONResponse:
    discussion = await _public_discussion(payload.discussion_id)

    if payload.parent_comment is not None:
        parent = await Comment.get(payload.parent_comment)
        if not parent:
            raise NotFound("Parent comment not found")
        if parent.discussion != discussion.id:
            raise ValidationFailed("Parent comment must belong to the same discussion")
        if parent.parent_comment is not None:
            raise ValidationFailed("Comments can only be 1 level deep (replies to replies are not allowed)")

    comment = Comment(
        discussion=discussion.id,
        user=current_user.id,
        content=payload.content,
        spoiler_alert=payload.spoiler_alert,
        parent_comment=payload.parent_comment,
    )
    await comment.insert()
    logger.info("User %s commented %s on discussion %s", current_user.id, comment.id, discussion.id)

    (out,) = await _present([comment])
    return send_success("Comment created successfully", {"comment": out}, status_code=status.HTTP_201_CREATED)


@router.patch("/{comment_id}", summary="Edit a comment")
async def update_comment(comment_id: PydanticObjectId, payload: CommentUpdate, current_user: CurrentUser) -> JSONResponse:
    comment = await Comment.get(comment_id)
    if not comment:
        raise NotFound("Comment not found")
    ensure_owner(comment.user, current_user, "You can only update your own comments")

    changes = {key: value for key, value in payload.changes().items() if value is not None}
    if not changes:
        raise ValidationFailed("No valid fields provided for update")
    await comment.patch(changes)

    (out,) = await _present([comment])
    return send_success("Comment updated successfully", {"comment": out})


@router.delete("/{comment_id}", summary="Delete a comment and its replies")
async def delete_comment(comment_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    comment = await Comment.get(comment_id)
    if not comment:
        raise NotFound("Comment not found")
    ensure_owner(comment.user, current_user, "You can only delete your own comments")

    if comment.parent_comment is None:
        await Comment.find({"parent_comment": comment.id}).delete()
    await comment.delete()
    logger.info("User %s deleted comment %s", current_user.id, comment_id)
    return send_success("Comment deleted successfully")
