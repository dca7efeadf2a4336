"""Beanie document models."""

from app.models.blog import Blog
from app.models.chapter import Chapter, ChapterVisibility
from app.models.collection import BookRef, Collection
from app.models.common import Genre, ReadingStatus, Visibility
from app.models.discussion import Comment, Discussion, DiscussionVisibility
from app.models.reading_list import ReadingListItem
from app.models.report import Report, ReportReason, ReportStatus, ReportType
from app.models.user import User
from app.models.user_book import UserBook

DOCUMENT_MODELS = [User, ReadingListItem, Collection, Blog, UserBook, Chapter, Discussion, Comment, Report]

__all__ = [
    "Blog",
    "BookRef",
    "Chapter",
    "ChapterVisibility",
    "Collection",
    "Comment",
    "DOCUMENT_MODELS",
    "Discussion",
    "DiscussionVisibility",
    "Genre",
    "ReadingListItem",
    "ReadingStatus",
    "Report",
    "ReportReason",
    "ReportStatus",
    "ReportType",
    "User",
    "UserBook",
    "Visibility",
]
