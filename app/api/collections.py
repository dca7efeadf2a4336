"""
Collection APIs.

PATCH /collections/{id} accepts a combined patch: addBook/removeBook are
applied atomically on the document first, then metadata fields.
"""

import logging
from typing import List, Optional

from beanie import PydanticObjectId
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import Forbidden, NotFound, ValidationFailed
from app.models.collection import BookRef, Collection
from app.models.common import Visibility
from app.schemas.collection import CollectionCreate, CollectionOut, CollectionPatch
from app.services.authors import author_previews
from app.services.collections import apply_collection_patch
from app.services.ownership import check_owner, ensure_owner

logger = logging.getLogger(__name__)
router = APIRouter()

PAGE_SIZE = 20


async def _with_owners(collections: List[Collection]) -> List[CollectionOut]:
    owners = await author_previews(c.user for c in collections)
    return [
        CollectionOut.model_validate(c).model_copy(update={"owner": owners.get(str(c.user))})
        for c in collections
    ]


@router.get("", summary="List collections")
async def list_collections(
    current_user: CurrentUser,
    owner: Optional[str] = Query(default=None, description="'me' or a user id; omit for all public"),
    page: int = Query(default=1, ge=1),
) -> JSONResponse:
    if owner is None:
        query = Collection.find({"visibility": Visibility.PUBLIC.value})
    elif owner == "me":
        query = Collection.find({"user": current_user.id})
    else:
        if not PydanticObjectId.is_valid(owner):
            raise ValidationFailed("Invalid owner id")
        query = Collection.find({"user": PydanticObjectId(owner), "visibility": Visibility.PUBLIC.value})

    query = query.sort(-Collection.created_at)
    if owner is None:
        query = query.skip((page - 1) * PAGE_SIZE).limit(PAGE_SIZE)
    collections = await query.to_list()

    return send_success("Collections fetched successfully", {"collections": await _with_owners(collections)})


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create a collection")
async def create_collection(payload: CollectionCreate, current_user: CurrentUser) -> JSONResponse:
    books: List[BookRef] = []
    seen = set()
    for ref in payload.books:
        if ref.volume_id not in seen:
            seen.add(ref.volume_id)
            books.append(BookRef(volume_id=ref.volume_id))

    collection = Collection(
        user=current_user.id,
        title=payload.title,
        description=payload.description,
        books=books,
        tags=payload.tags,
        visibility=payload.visibility,
    )
    await collection.insert()
    logger.info("User %s created collection %s", current_user.id, collection.id)

    (out,) = await _with_owners([collection])
    return send_success(
        "Collection created successfully",
        {"collection": out},
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/{collection_id}", summary="Get one collection")
async def get_collection(collection_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    collection = await Collection.get(collection_id)
    if not collection:
        raise NotFound("Collection not found")
    if collection.visibility != Visibility.PUBLIC and not check_owner(collection.user, current_user):
        raise Forbidden("You do not have access to this collection")

    (out,) = await _with_owners([collection])
    return send_success("Collection fetched successfully", {"collection": out})


@router.patch("/{collection_id}", summary="Update a collection")
async def update_collection(
    collection_id: PydanticObjectId,
    payload: CollectionPatch,
    current_user: CurrentUser,
) -> JSONResponse:
    collection = await Collection.get(collection_id)
    if not collection:
        raise NotFound("Collection not found")
    ensure_owner(collection.user, current_user, "You do not have permission to update this collection")
    if payload.is_empty():
        raise ValidationFailed("No valid fields provided for update")

    updated = await apply_collection_patch(collection, payload)

    (out,) = await _with_owners([updated])
    return send_success("Collection updated successfully", {"collection": out})


@router.delete("/{collection_id}", summary="Delete a collection")
async def delete_collection(collection_id: PydanticObjectId, current_user: CurrentUser) -> JSONResponse:
    collection = await Collection.get(collection_id)
    if not collection:
        raise NotFound("Collection not found")
    ensure_owner(collection.user, current_user, "You do not have permission to delete this collection")

    await collection.delete()
    logger.info("User %s deleted collection %s", current_user.id, collection_id)
    return send_success("Collection deleted successfully")
