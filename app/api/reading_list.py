"""
Reading list APIs.

Mutations validate the merged {status, startedAt, completedAt} with
validate_reading_list_dates before any write, and answer with the caller's
full reading list.
"""

import logging

from beanie import PydanticObjectId
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import NotFound, ValidationFailed
from app.models.common import Visibility
from app.models.reading_list import ReadingListItem
from app.models.user import User
from app.schemas.reading_list import ReadingListCreate, ReadingListItemOut, ReadingListUpdate
from app.services.ownership import ensure_owner
from app.services.reading_list_rules import normalize_timestamp, validate_reading_list_dates

logger = logging.getLogger(__name__)
router = APIRouter()


async def _reading_list_of(user_id: PydanticObjectId, public_only: bool = False) -> list[ReadingListItemOut]:
    query = {"user": user_id}
    if public_only:
        query["visibility"] = Visibility.PUBLIC.value
    items = await ReadingListItem.find(query).sort(-ReadingListItem.updated_at).to_list()
    return [ReadingListItemOut.model_validate(item) for item in items]


@router.get("/me", summary="Current user's reading list")
async def get_my_reading_list(current_user: CurrentUser) -> JSONResponse:
    return send_success(
        "Reading list fetched successfully",
        {"readingList": await _reading_list_of(current_user.id)},
    )


@router.get("/{user_id}", summary="Public reading list of a user")
async def get_reading_list_by_user(user_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    if not await User.get(user_id):
        raise NotFound("User not found")
    return send_success(
        "Reading list fetched successfully",
        {"readingList": await _reading_list_of(user_id, public_only=True)},
    )


@router.post("", status_code=status.HTTP_201_CREATED, summary="Add a book to the reading list")
async def add_to_reading_list(payload: ReadingListCreate, current_user: CurrentUser) -> JSONResponse:
    error = validate_reading_list_dates(payload.status, payload.started_at, payload.completed_at)
    if error:
        raise ValidationFailed(error)

    item = ReadingListItem(
        user=current_user.id,
        volume_id=payload.volume_id,
        status=payload.status,
        started_at=normalize_timestamp(payload.started_at),
        completed_at=normalize_timestamp(payload.completed_at),
        visibility=payload.visibility,
    )
    try:
        await item.insert()
    except DuplicateKeyError:
        raise ValidationFailed("Book is already in your reading list")
    logger.info("User %s added %s to reading list (%s)", current_user.id, item.volume_id, item.status.value)

    return send_success(
        "Reading list updated successfully",
        {"item": ReadingListItemOut.model_validate(item), "readingList": await _reading_list_of(current_user.id)},
        status_code=status.HTTP_201_CREATED,
    )


@router.patch("/{item_id}", summary="Update a reading list item")
async def update_reading_list_item(
    item_id: PydanticObjectId,
    payload: ReadingListUpdate,
    current_user: CurrentUser,
) -> JSONResponse:
    item = await ReadingListItem.get(item_id)
    if not item:
        raise NotFound("Reading list item not found")
    ensure_owner(item.user, current_user, "You do not have permission to update this item")

    changes = payload.changes()
    if not changes:
        raise ValidationFailed("No valid fields provided for update")
    if changes.get("status", item.status) is None:
        raise ValidationFailed("status cannot be null")
    if changes.get("visibility", item.visibility) is None:
        raise ValidationFailed("visibility cannot be null")
    for key in ("started_at", "completed_at"):
        if key in changes:
            changes[key] = normalize_timestamp(changes[key])

    error = validate_reading_list_dates(
        changes.get("status", item.status),
        changes.get("started_at", item.started_at),
        changes.get("completed_at", item.completed_at),
    )
    if error:
        raise ValidationFailed(error)

    await item.patch(changes)
    return send_success(
        "Reading list updated successfully",
        {"item": ReadingListItemOut.model_validate(item), "readingList": await _reading_list_of(current_user.id)},
    )


@router.delete("/{item_id}", summary="Remove a book from the reading list")
async def delete_reading_list_item(item_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    item = await ReadingListItem.get(item_id)
    if not item:
        raise NotFound("Reading list item not found")
    ensure_owner(item.user, current_user, "You do not have permission to delete this item")

    await item.delete()
    logger.info("User %s removed reading list item %s", current_user.id, item_id)
    return send_success(
        "Reading list item deleted successfully",
        {"readingList": await _reading_list_of(current_user.id)},
    )
