# src/taskboard/store/task_index.py

from __future__ import annotations

import logging

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..core.errors import StoreError
from ..core.models import IndexedTask
from .mongo import TASKS_COLLECTION

logger = logging.getLogger(__name__)


class MongoTaskIndex:
    """
    Flat `tasks` collection: one document per task, keyed by
    (project_slug, board_name, id_task).

    Derived data. The project document stays authoritative; this index only
    exists so a task can be found without loading its project.
    """

    def __init__(self, db: Database) -> None:
        self._col: Collection = db[TASKS_COLLECTION]
        try:
            self._col.create_index(
                [("project_slug", ASCENDING), ("board_name", ASCENDING), ("id_task", ASCENDING)],
                unique=True,
                name="uniq_task_key",
            )
        except PyMongoError as exc:
            raise StoreError(f"couldn't create indexes on {TASKS_COLLECTION}: {exc}") from exc
        logger.info("TaskIndex ready db=%s", db.name)

    def get(self, project_slug: str, board_name: str, id_task: int) -> IndexedTask | None:
        try:
            doc = self._col.find_one(
                {"id_task": id_task, "project_slug": project_slug, "board_name": board_name},
                {"_id": 0},
            )
        except PyMongoError as exc:
            raise StoreError(f"task lookup failed: {exc}") from exc
        return IndexedTask.from_doc(doc) if doc else None

    def insert(self, task: IndexedTask) -> None:
        try:
            self._col.insert_one(task.to_doc())
        except PyMongoError as exc:
            raise StoreError(f"couldn't index task {task.id_task}: {exc}") from exc
        logger.debug(
            "Task indexed project=%s board=%s id_task=%s",
            task.project_slug,
            task.board_name,
            task.id_task,
        )

    def delete(self, project_slug: str, board_name: str, id_task: int) -> int:
        try:
            res = self._col.delete_one(
                {"id_task": id_task, "project_slug": project_slug, "board_name": board_name}
            )
        except PyMongoError as exc:
            raise StoreError(f"couldn't unindex task {id_task}: {exc}") from exc
        return int(res.deleted_count)

    def delete_for_board(self, project_slug: str, board_name: str) -> int:
        try:
            res = self._col.delete_many({"project_slug": project_slug, "board_name": board_name})
        except PyMongoError as exc:
            raise StoreError(f'couldn\'t unindex tasks of board "{board_name}": {exc}') from exc
        return int(res.deleted_count)

    def delete_for_project(self, project_slug: str) -> int:
        try:
            res = self._col.delete_many({"project_slug": project_slug})
        except PyMongoError as exc:
            raise StoreError(f'couldn\'t unindex tasks of project "{project_slug}": {exc}') from exc
        return int(res.deleted_count)
