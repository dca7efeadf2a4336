from datetime import datetime
from typing import Any, Optional

from beanie import PydanticObjectId
from pydantic import Field, field_validator

from app.models.report import ReportReason, ReportStatus, ReportType
from app.schemas.base import RequestModel, ResponseModel


class ReportCreate(RequestModel):
    report_type: ReportType
    target_id: PydanticObjectId
    reason: ReportReason
    description: Optional[str] = Field(default=None, max_length=200)

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value


class ReportOut(ResponseModel):
    id: PydanticObjectId
    report_type: ReportType
    target_id: PydanticObjectId
    reason: ReportReason
    description: Optional[str] = None
    status: ReportStatus
    created_at: datetime
    updated_at: datetime


class PaginationOut(ResponseModel):
    current_page: int
    total_pages: int
    total_reports: int
    has_next_page: bool
    has_prev_page: bool
