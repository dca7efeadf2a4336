"""
Blog APIs.
"""

import logging
from typing import List, Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import Forbidden, NotFound, ValidationFailed
from app.models.blog import Blog
from app.models.common import Visibility
from app.schemas.blog import BlogCreate, BlogOut, BlogUpdate
from app.services.authors import author_previews
from app.services.ownership import check_owner, ensure_owner

logger = logging.getLogger(__name__)
router = APIRouter()

PAGE_SIZE = 20


async def _with_owners(blogs: List[Blog]) -> List[BlogOut]:
    owners = await author_previews(b.user for b in blogs)
    return [BlogOut.model_validate(b).model_copy(update={"owner": owners.get(str(b.user))}) for b in blogs]


@router.get("", summary="List blogs")
async def list_blogs(
    current_user: CurrentUser,
    author: Optional[str] = Query(default=None, description="'me' or a user id; omit for all public"),
    page: int = Query(default=1, ge=1),
) -> JSONResponse:
    if author is None:
        query = Blog.find({"visibility": Visibility.PUBLIC.value})
    elif author == "me":
        query = Blog.find({"user": current_user.id})
    else:
        if not PydanticObjectId.is_valid(author):
            raise ValidationFailed("Invalid author id")
        query = Blog.find({"user": PydanticObjectId(author), "visibility": Visibility.PUBLIC.value})

    query = query.sort(-Blog.created_at)
    if author is None:
        query = query.skip((page - 1) * PAGE_SIZE).limit(PAGE_SIZE)
    blogs = await query.to_list()
    return send_success("Blogs fetched successfully", {"blogs": await _with_owners(blogs)})


@router.post("", status_code=status.HTTP_201_CREATED, summary="Publish a blog")
async def create_blog(payload: BlogCreate, current_user: CurrentUser) -> JSONResponse:
    blog = Blog(user=current_user.id, **payload.model_dump())
    await blog.insert()
    logger.info("User %s created blog %s", current_user.id, blog.id)
    (out,) = await _with_owners([blog])
    return send_success("Blog created successfully", {"blog": out}, status_code=status.HTTP_201_CREATED)


@router.get("/{blog_id}", summary="Get one blog")
async def get_blog(blog_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    blog = await Blog.get(blog_id)
    if not blog:
        raise NotFound("Blog not found")
    if blog.visibility != Visibility.PUBLIC and not check_owner(blog.user, current_user):
        raise Forbidden("You do not have access to this blog")
    (out,) = await _with_owners([blog])
    return send_success("Blog fetched successfully", {"blog": out})


@router.patch("/{blog_id}", summary="Edit a blog")
async def update_blog(blog_id: PydanticObjectId, payload: BlogUpdate, current_user: CurrentUser) -> JSONResponse:
    blog = await Blog.get(blog_id)
    if not blog:
        raise NotFound("Blog not found")
    ensure_owner(blog.user, current_user, "You can only update your own blogs")

    changes = {key: value for key, value in payload.changes().items() if value is not None}
    if not changes:
        raise ValidationFailed("No valid fields provided for update")
    await blog.patch(changes)

    (out,) = await _with_owners([blog])
    return send_success("Blog updated successfully", {"blog": out})


@router.delete("/{blog_id}", summary="Delete a blog")
async def delete_blog(blog_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    blog = await Blog.get(blog_id)
    if not blog:
        raise NotFound("Blog not found")
    ensure_owner(blog.user, current_user, "You can only delete your own blogs")

    await blog.delete()
    logger.info("User %s deleted blog %s", current_user.id, blog_id)
    return send_success("Blog deleted successfully")
