# src/taskboard/store/mongo.py

from __future__ import annotations

import logging

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..core.errors import StoreUnavailable

logger = logging.getLogger(__name__)

PROJECTS_COLLECTION = "projects"
TASKS_COLLECTION = "tasks"


def open_database(settings) -> tuple[MongoClient, Database]:
    """
    Connect to MongoDB and return (client, database).

    The server is pinged once so an unreachable store fails here, at startup,
    instead of hanging the first request.
    """
    client: MongoClient = MongoClient(
        settings.mongo_url,
        serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
    )
    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        client.close()
        raise StoreUnavailable(f"cannot reach document store at {settings.mongo_url}: {exc}") from exc

    db = client[settings.database_name]
    logger.info("Connected to %s db=%s", settings.mongo_url, db.name)
    return client, db
