from datetime import datetime
from typing import Any, Dict, List, Optional

from beanie import PydanticObjectId
from pydantic import Field

from app.models.common import Visibility
from app.schemas.base import AuthorOut, RequestModel, ResponseModel

STRUCTURAL_FIELDS = {"add_book", "remove_book"}


class BookRefIn(RequestModel):
    volume_id: str = Field(min_length=1, max_length=100)


class CollectionCreate(RequestModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(default="", max_length=200)
    books: List[BookRefIn] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    visibility: Visibility = Visibility.PUBLIC


class CollectionPatch(RequestModel):
    """
    Combined patch: structural (addBook/removeBook) and metadata fields may
    be sent together. Structural changes are applied first.
    """

    add_book: Optional[str] = Field(default=None, min_length=1, max_length=100)
    remove_book: Optional[str] = Field(default=None, min_length=1, max_length=100)
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=200)
    tags: Optional[List[str]] = None
    visibility: Optional[Visibility] = None

    def metadata_changes(self) -> Dict[str, Any]:
        # null means "leave as is" for metadata
        changes = self.changes(exclude=STRUCTURAL_FIELDS)
        return {key: value for key, value in changes.items() if value is not None}

    def is_empty(self) -> bool:
        # a field sent as null asks for nothing
        return all(value is None for value in self.changes().values())


class BookRefOut(ResponseModel):
    volume_id: str
    added_at: datetime


class CollectionOut(ResponseModel):
    id: PydanticObjectId
    user: PydanticObjectId
    owner: Optional[AuthorOut] = None
    title: str
    description: Optional[str] = ""
    books: List[BookRefOut] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    visibility: Visibility
    created_at: datetime
    updated_at: datetime
