"""
Base classes for request and response schemas.

Wire format is camelCase (volumeId, startedAt...); storage is snake_case.
Request bodies reject unknown fields.
"""

from enum import Enum
from typing import Any, Dict, Optional

from beanie import PydanticObjectId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def to_mongo(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [to_mongo(v) for v in value]
    return value


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def changes(self, exclude: Optional[set] = None) -> Dict[str, Any]:
        """Fields the client actually sent, keyed by storage name."""
        sent = self.model_dump(exclude_unset=True, exclude=exclude)
        return {key: to_mongo(value) for key, value in sent.items()}


class ResponseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class AuthorOut(ResponseModel):
    """Public preview of a user attached to content they own."""

    id: PydanticObjectId
    username: str
    display_name: str
    avatar: Optional[str] = None
