"""
Database connection and Beanie ODM initialization.

Beanie is an async ODM for MongoDB built on Motor and Pydantic.
We initialize it once at startup and close at shutdown.
"""

import logging
from typing import Optional

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import get_settings
from app.models import DOCUMENT_MODELS

logger = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None


async def connect_to_mongo() -> None:
    """
    Create Motor client and initialize Beanie with document models.
    Every network call to Mongo is bounded by mongodb_timeout_ms.
    """
    global _client
    settings = get_settings()
    timeout = settings.mongodb_timeout_ms
    _client = AsyncIOMotorClient(
        settings.mongodb_url,
        serverSelectionTimeoutMS=timeout,
        connectTimeoutMS=timeout,
        socketTimeoutMS=timeout,
    )
    database = _client[settings.mongodb_database]

    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    logger.info("MongoDB connection established; Beanie initialized.")


async def close_mongo_connection() -> None:
    """Close MongoDB connection on application shutdown."""
    global _client
    if _client is not None:
        logger.info("Closing MongoDB connection.")
        _client.close()
        _client = None
