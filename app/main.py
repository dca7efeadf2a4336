"""
FastAPI application entry point.

Sets up the app, lifespan (DB connect/disconnect), CORS, logging, the
response envelope's exception handlers, and includes API routers.

Routing: /api/auth uses the identity-only policy; every other router guards
its handlers with verify_user. /api/test/ping is the only open route.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import accounts, blogs, chapters, collections, comments, discussions, health, profile, reading_list, reports, user_books
from app.api.responses import register_exception_handlers
from app.config import get_settings
from app.database import close_mongo_connection, connect_to_mongo

# Configure logging - single place for log format and level
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: runs on startup and shutdown.
    We use it to connect to MongoDB at start and disconnect at end.
    """
    await connect_to_mongo()
    settings = get_settings()
    if settings.firebase_auth_emulator_host:
        logger.warning(
            "FIREBASE_AUTH_EMULATOR_HOST is set (%s): ID token signatures are NOT verified.",
            settings.firebase_auth_emulator_host,
        )
    elif not settings.firebase_project_id:
        logger.warning("FIREBASE_PROJECT_ID is not set; every authenticated request will get 401.")
    yield
    await close_mongo_connection()


def create_application() -> FastAPI:
    """Factory for the FastAPI app. Keeps main.py clean and testable."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Social reading platform: reading lists, collections, blogs, books and discussions.",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(health.router, prefix="/api/test", tags=["health"])
    app.include_router(accounts.router, prefix="/api/auth", tags=["auth"])
    app.include_router(profile.router, prefix="/api/profile", tags=["profile"])
    app.include_router(reading_list.router, prefix="/api/reading-list", tags=["reading-list"])
    app.include_router(collections.router, prefix="/api/collections", tags=["collections"])
    app.include_router(blogs.router, prefix="/api/blogs", tags=["blogs"])
    app.include_router(user_books.router, prefix="/api/user-books", tags=["user-books"])
    app.include_router(chapters.router, prefix="/api/chapters", tags=["chapters"])
    app.include_router(discussions.router, prefix="/api/discussions", tags=["discussions"])
    app.include_router(comments.router, prefix="/api/comments", tags=["comments"])
    app.include_router(reports.router, prefix="/api/reports", tags=["reports"])

    return app


app = create_application()
