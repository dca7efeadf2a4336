"""
Chapter APIs. A chapter belongs to a UserBook; only the book's author may
create, edit or delete its chapters.
"""

import logging
from typing import List, Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import Forbidden, NotFound, ValidationFailed
from app.models.chapter import Chapter, ChapterVisibility, calculate_word_count
from app.models.common import Visibility
from app.models.user_book import UserBook
from app.schemas.chapter import ChapterCreate, ChapterOut, ChapterUpdate
from app.schemas.user_book import LikeOut
from app.services.authors import author_previews
from app.services.likes import toggle_like
from app.services.ownership import check_owner, ensure_owner

logger = logging.getLogger(__name__)
router = APIRouter()


async def _present(chapters: List[Chapter], include_content: bool = True) -> List[ChapterOut]:
    owners = await author_previews(c.author for c in chapters)
    out = []
    for chapter in chapters:
        extra = {"owner": owners.get(str(chapter.author)), "like_count": len(chapter.likes)}
        if not include_content:
            extra["content"] = None
        out.append(ChapterOut.model_validate(chapter).model_copy(update=extra))
    return out


@router.get("/book/{book_id}", summary="List chapters of a book")
async def list_chapters_for_book(
    book_id: PydanticObjectId,
    current_user: CurrentUser,
    published: Optional[bool] = None,
) -> JSONResponse:
    book = await UserBook.get(book_id)
    if not book:
        raise NotFound("Book not found")

    filters: dict = {"book": book.id}
    if not check_owner(book.author, current_user):
        filters["visibility"] = ChapterVisibility.PUBLIC.value
    elif published is not None:
        filters["visibility"] = (ChapterVisibility.PUBLIC if published else ChapterVisibility.PRIVATE).value

    chapters = await Chapter.find(filters).sort(+Chapter.chapter_number).to_list()
    return send_success(
        "Chapters fetched successfully",
        {"chapters": await _present(chapters, include_content=False)},
    )


@router.post("", status_code=status.HTTP_201_CREATED, summary="Write a chapter")
async def create_chapter(payload: ChapterCreate, current_user: CurrentUser) -> JSONResponse:
    book = await UserBook.get(payload.book_id)
    if not book:
        raise NotFound("Book not found")
    ensure_owner(book.author, current_user, "You can only create chapters for your own books")

    if payload.visibility == ChapterVisibility.PUBLIC and book.visibility == Visibility.PRIVATE:
        raise ValidationFailed("Chapter cannot be public when the book is private")
    if await Chapter.find_one({"book": book.id, "chapter_number": payload.chapter_number}):
        raise ValidationFailed("Chapter number already exists for this book")

    chapter = Chapter(
        book=book.id,
        author=current_user.id,
        title=payload.title,
        content=payload.content,
        chapter_number=payload.chapter_number,
        visibility=payload.visibility,
        word_count=calculate_word_count(payload.content),
    )
    try:
        await chapter.insert()
    except DuplicateKeyError:
        raise ValidationFailed("Chapter number already exists for this book")
    logger.info("User %s created chapter %s of book %s", current_user.id, chapter.id, book.id)

    (out,) = await _present([chapter])
    return send_success("Chapter created successfully", {"chapter": out}, status_code=status.HTTP_201_CREATED)


@router.get("/{chapter_id}", summary="Read a chapter")
async def get_chapter(chapter_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    chapter = await Chapter.get(chapter_id)
    if not chapter:
        raise NotFound("Chapter not found")
    if chapter.visibility != ChapterVisibility.PUBLIC and not check_owner(chapter.author, current_user):
        raise Forbidden("You do not have access to this chapter")

    (out,) = await _present([chapter])
    return send_success("Chapter fetched successfully", {"chapter": out})


@router.patch("/{chapter_id}", summary="Edit a chapter")
async def update_chapter(
    chapter_id: PydanticObjectId,
    payload: ChapterUpdate,
    current_user: CurrentUser,
) -> JSONResponse:
    chapter = await Chapter.get(chapter_id)
    if not chapter:
        raise NotFound("Chapter not found")
    ensure_owner(chapter.author, current_user, "You can only update your own chapters")

    changes = {key: value for key, value in payload.changes().items() if value is not None}
    if not changes:
        raise ValidationFailed("No valid fields provided for update")

    if changes.get("visibility") == ChapterVisibility.PUBLIC.value:
        book = await UserBook.get(chapter.book)
        if book and book.visibility == Visibility.PRIVATE:
            raise ValidationFailed("Chapter cannot be public when the book is private")
    if "content" in changes:
        changes["word_count"] = calculate_word_count(changes["content"])

    await chapter.patch(changes)
    (out,) = await _present([chapter])
    return send_success("Chapter updated successfully", {"chapter": out})


@router.delete("/{chapter_id}", summary="Delete a chapter")
async def delete_chapter(chapter_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    chapter = await Chapter.get(chapter_id)
    if not chapter:
        raise NotFound("Chapter not found")
    ensure_owner(chapter.author, current_user, "You can only delete your own chapters")

    await chapter.delete()
    logger.info("User %s deleted chapter %s", current_user.id, chapter_id)
    return send_success("Chapter deleted successfully")


@router.post("/{chapter_id}/like", summary="Like or unlike a public chapter")
async def like_chapter(chapter_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    chapter = await Chapter.get(chapter_id)
    if not chapter:
        raise NotFound("Chapter not found")
    if chapter.visibility != ChapterVisibility.PUBLIC:
        raise Forbidden("You can only like public chapters")
    if check_owner(chapter.author, current_user):
        raise ValidationFailed("You cannot like your own chapter")

    liked, count = await toggle_like(Chapter, chapter.id, current_user.id)
    message = "Chapter liked successfully" if liked else "Chapter unliked successfully"
    return send_success(message, LikeOut(liked=liked, like_count=count).model_dump(by_alias=True))
