# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- opens the document store and wires the repositories into BoardService,
- returns everything as one AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.service import BoardService
from ..core.state import AppState
from ..store.mongo import open_database
from ..store.project_store import MongoProjectStore
from ..store.task_index import MongoTaskIndex

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.log_dir.mkdir(parents=True, exist_ok=True)


def build_state(db, *, settings, client=None) -> AppState:
    """Wire repositories over an already opened database."""
    projects = MongoProjectStore(db)
    task_index = MongoTaskIndex(db)
    return AppState(
        settings=settings,
        projects=projects,
        task_index=task_index,
        service=BoardService(projects, task_index),
        client=client,
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Raises StoreUnavailable if the document store cannot be reached.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    client, db = open_database(settings)
    try:
        return build_state(db, settings=settings, client=client)
    except Exception:
        client.close()
        raise
