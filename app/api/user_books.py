"""
User book APIs: books written on the platform, the parents of chapters.
"""

import logging
import re
from collections import defaultdict
from typing import Dict, List, Optional

from beanie import PydanticObjectId
from beanie.operators import In
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import Forbidden, NotFound, ValidationFailed
from app.models.chapter import Chapter, ChapterVisibility
from app.models.common import Genre, Visibility
from app.models.user_book import UserBook
from app.schemas.user_book import ChapterSummaryOut, LikeOut, UserBookCreate, UserBookOut, UserBookUpdate
from app.services.authors import author_previews
from app.services.likes import toggle_like
from app.services.ownership import check_owner, ensure_owner

logger = logging.getLogger(__name__)
router = APIRouter()

PAGE_SIZE = 20


async def _chapter_stats(book_ids: List[PydanticObjectId]) -> Dict[str, Dict[str, int]]:
    stats: Dict[str, Dict[str, int]] = defaultdict(lambda: {"chapter_count": 0, "total_word_count": 0})
    if not book_ids:
        return stats
    for chapter in await Chapter.find(In(Chapter.book, book_ids)).to_list():
        entry = stats[str(chapter.book)]
        entry["chapter_count"] += 1
        entry["total_word_count"] += chapter.word_count
    return stats


async def _present(books: List[UserBook], with_stats: bool = True) -> List[UserBookOut]:
    owners = await author_previews(b.author for b in books)
    stats = await _chapter_stats([b.id for b in books]) if with_stats else {}
    out = []
    for book in books:
        extra = {"owner": owners.get(str(book.author)), "like_count": len(book.likes)}
        if with_stats:
            extra.update(stats[str(book.id)])
        out.append(UserBookOut.model_validate(book).model_copy(update=extra))
    return out


@router.get("", summary="List user books")
async def list_user_books(
    current_user: CurrentUser,
    author: Optional[str] = Query(default=None, description="'me' or a user id; omit for all public"),
    search: Optional[str] = None,
    genre: Optional[Genre] = None,
    completed: Optional[bool] = None,
    page: int = Query(default=1, ge=1),
) -> JSONResponse:
    filters: dict = {}
    if author is None:
        filters["visibility"] = Visibility.PUBLIC.value
    elif author == "me":
        filters["author"] = current_user.id
    else:
        if not PydanticObjectId.is_valid(author):
            raise ValidationFailed("Invalid author id")
        filters["author"] = PydanticObjectId(author)
        filters["visibility"] = Visibility.PUBLIC.value
    if search:
        filters["title"] = {"$regex": re.escape(search), "$options": "i"}
    if genre:
        filters["genres"] = genre.value
    if completed is not None:
        filters["is_completed"] = completed

    books = (
        await UserBook.find(filters)
        .sort(-UserBook.created_at)
        .skip((page - 1) * PAGE_SIZE)
        .limit(PAGE_SIZE)
        .to_list()
    )
    return send_success("User books fetched successfully", {"books": await _present(books)})


@router.post("", status_code=status.HTTP_201_CREATED, summary="Start a new book")
async def create_user_book(payload: UserBookCreate, current_user: CurrentUser) -> JSONResponse:
    book = UserBook(author=current_user.id, **payload.model_dump())
    await book.insert()
    logger.info("User %s created book %s", current_user.id, book.id)
    (out,) = await _present([book], with_stats=False)
    return send_success("User book created successfully", {"book": out}, status_code=status.HTTP_201_CREATED)


@router.get("/{book_id}", summary="Get a book with its visible chapters")
async def get_user_book(book_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    book = await UserBook.get(book_id)
    if not book:
        raise NotFound("User book not found")
    is_author = check_owner(book.author, current_user)
    if book.visibility != Visibility.PUBLIC and not is_author:
        raise Forbidden("You do not have access to this book")

    chapter_filter: dict = {"book": book.id}
    if not is_author:
        chapter_filter["visibility"] = ChapterVisibility.PUBLIC.value
    chapters = await Chapter.find(chapter_filter).sort(+Chapter.chapter_number).to_list()

    (out,) = await _present([book])
    out = out.model_copy(update={"chapters": [ChapterSummaryOut.model_validate(c) for c in chapters]})
    return send_success("User book fetched successfully", {"book": out})


@router.patch("/{book_id}", summary="Edit a book")
async def update_user_book(
    book_id: PydanticObjectId,
    payload: UserBookUpdate,
    current_user: CurrentUser,
) -> JSONResponse:
    book = await UserBook.get(book_id)
    if not book:
        raise NotFound("User book not found")
    ensure_owner(book.author, current_user, "You can only update your own books")

    changes = {key: value for key, value in payload.changes().items() if value is not None or key == "synopsis"}
    if not changes:
        raise ValidationFailed("No valid fields provided for update")

    if changes.get("visibility") == Visibility.PRIVATE.value:
        public_chapter = await Chapter.find_one({"book": book.id, "visibility": ChapterVisibility.PUBLIC.value})
        if public_chapter:
            raise ValidationFailed("Cannot make book private while it has public chapters")
    if changes.get("is_completed") is True:
        if await Chapter.find({"book": book.id}).count() == 0:
            raise ValidationFailed("Cannot mark book as completed without any chapters")

    await book.patch(changes)
    (out,) = await _present([book])
    return send_success("User book updated successfully", {"book": out})


@router.delete("/{book_id}", summary="Delete a book and all of its chapters")
async def delete_user_book(book_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    book = await UserBook.get(book_id)
    if not book:
        raise NotFound("User book not found")
    ensure_owner(book.author, current_user, "You can only delete your own books")

    await Chapter.find({"book": book.id}).delete()
    await book.delete()
    logger.info("User %s deleted book %s and its chapters", current_user.id, book_id)
    return send_success("User book and all chapters deleted successfully")


@router.post("/{book_id}/like", summary="Like or unlike a public book")
async def like_user_book(book_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    book = await UserBook.get(book_id)
    if not book:
        raise NotFound("User book not found")
    if book.visibility != Visibility.PUBLIC:
        raise Forbidden("You can only like public books")
    if check_owner(book.author, current_user):
        raise ValidationFailed("You cannot like your own book")

    liked, count = await toggle_like(UserBook, book.id, current_user.id)
    message = "Book liked successfully" if liked else "Book unliked successfully"
    return send_success(message, LikeOut(liked=liked, like_count=count).model_dump(by_alias=True))
