"""
Report APIs. A signed-in user can flag content or another user and list the
reports they filed. Moderation happens outside this API.
"""

import logging
import math
from typing import Dict, Optional, Type

from beanie import Document
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from app.api.auth import CurrentUser
from app.api.responses import send_success
from app.errors import Conflict, NotFound
from app.models.blog import Blog
from app.models.collection import Collection
from app.models.discussion import Comment, Discussion
from app.models.report import Report, ReportStatus, ReportType
from app.models.user import User
from app.models.user_book import UserBook
from app.schemas.report import PaginationOut, ReportCreate, ReportOut

logger = logging.getLogger(__name__)
router = APIRouter()

REPORT_TARGETS: Dict[ReportType, Type[Document]] = {
    ReportType.COLLECTION: Collection,
    ReportType.BLOG: Blog,
    ReportType.DISCUSSION: Discussion,
    ReportType.COMMENT: Comment,
    ReportType.USERBOOK: UserBook,
    ReportType.USER: User,
}

ALREADY_REPORTED = "You have already reported this content"


@router.post("", status_code=status.HTTP_201_CREATED, summary="Report content or a user")
async def submit_report(payload: ReportCreate, current_user: CurrentUser) -> JSONResponse:
    target = await REPORT_TARGETS[payload.report_type].get(payload.target_id)
    if target is None:
        raise NotFound("Target content not found")

    existing = await Report.find_one(
        {
            "reporter": current_user.id,
            "report_type": payload.report_type.value,
            "target_id": payload.target_id,
        }
    )
    if existing:
        raise Conflict(ALREADY_REPORTED)

    report = Report(reporter=current_user.id, **payload.model_dump())
    try:
        await report.insert()
    except DuplicateKeyError:
        raise Conflict(ALREADY_REPORTED)
    logger.info(
        "User %s reported %s %s for %s",
        current_user.id,
        payload.report_type.value,
        payload.target_id,
        payload.reason.value,
    )
    return send_success(
        "Report submitted successfully",
        {"report": ReportOut.model_validate(report)},
        status_code=status.HTTP_201_CREATED,
    )


@router.get("/my-reports", summary="Reports filed by the current user")
async def my_reports(
    current_user: CurrentUser,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=50),
    report_status: Optional[ReportStatus] = Query(default=None, alias="status"),
    report_type: Optional[ReportType] = Query(default=None, alias="reportType"),
) -> JSONResponse:
    filters: dict = {"reporter": current_user.id}
    if report_status:
        filters["status"] = report_status.value
    if report_type:
        filters["report_type"] = report_type.value

    total = await Report.find(filters).count()
    total_pages = math.ceil(total / limit)
    reports = (
        await Report.find(filters)
        .sort(-Report.created_at)
        .skip((page - 1) * limit)
        .limit(limit)
        .to_list()
    )
    pagination = PaginationOut(
        current_page=page,
        total_pages=total_pages,
        total_reports=total,
        has_next_page=page < total_pages,
        has_prev_page=page > 1,
    )
    return send_success(
        "Reports retrieved successfully",
        {"reports": [ReportOut.model_validate(r) for r in reports], "pagination": pagination},
    )
