# src/taskboard/store/project_store.py

from __future__ import annotations

import logging
from typing import Any

from pymongo import ASCENDING
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..core.errors import Conflict, StoreError
from ..core.models import Board, Project, Task
from .mongo import PROJECTS_COLLECTION

logger = logging.getLogger(__name__)

# Never expose Mongo's ObjectId; documents are keyed by slug.
_NO_ID = {"_id": 0}


class MongoProjectStore:
    """
    `projects` collection store.

    One document per project:
        {slug, boards: [{name, _id_counter, tasks: [{id_task, description}]}]}

    Every write below is a single-document update, so each one is atomic on
    its own. Nothing here spans collections.
    """

    def __init__(self, db: Database) -> None:
        self._col: Collection = db[PROJECTS_COLLECTION]
        self._ensure_indexes()
        try:
            total = self._col.count_documents({})
        except PyMongoError:
            total = -1
        logger.info("ProjectStore ready db=%s total=%s", db.name, total)

    def _ensure_indexes(self) -> None:
        try:
            self._col.create_index([("slug", ASCENDING)], unique=True, name="uniq_slug")
        except PyMongoError as exc:
            raise StoreError(f"couldn't create indexes on {PROJECTS_COLLECTION}: {exc}") from exc

    @staticmethod
    def _board_filter(slug: str, board_name: str, **extra: Any) -> dict[str, Any]:
        # $elemMatch (rather than "boards.name") so the positional "$" in the
        # update points at the same board the filter matched.
        return {"slug": slug, "boards": {"$elemMatch": {"name": board_name, **extra}}}

    def _one(self, query: dict[str, Any]) -> Project | None:
        try:
            doc = self._col.find_one(query, _NO_ID)
        except PyMongoError as exc:
            raise StoreError(f"project lookup failed: {exc}") from exc
        return Project.from_doc(doc) if doc else None

    # ---- public API ----

    def get(self, slug: str) -> Project | None:
        return self._one({"slug": slug})

    def insert(self, project: Project) -> None:
        try:
            self._col.insert_one(project.to_doc())
        except DuplicateKeyError as exc:
            raise Conflict(f'project "{project.slug}" already exists') from exc
        except PyMongoError as exc:
            raise StoreError(f'couldn\'t create project "{project.slug}": {exc}') from exc
        logger.debug("Project inserted slug=%s", project.slug)

    def delete(self, slug: str) -> int:
        try:
            res = self._col.delete_one({"slug": slug})
        except PyMongoError as exc:
            raise StoreError(f'couldn\'t delete project "{slug}": {exc}') from exc
        return int(res.deleted_count)

    def find_with_board(self, slug: str, board_name: str) -> Project | None:
        return self._one({"slug": slug, "boards.name": board_name})

    def push_board(self, slug: str, board: Board) -> bool:
        """Append `board` unless the project already has a board with that name."""
        try:
            res = self._col.update_one(
                {"slug": slug, "boards.name": {"$ne": board.name}},
                {"$push": {"boards": board.to_doc()}},
            )
        except PyMongoError as exc:
            raise StoreError(f'couldn\'t create board "{board.name}": {exc}') from exc
        return res.modified_count > 0

    def pull_board(self, slug: str, board_name: str) -> int:
        try:
            res = self._col.update_one({"slug": slug}, {"$pull": {"boards": {"name": board_name}}})
        except PyMongoError as exc:
            raise StoreError(f'couldn\'t delete board "{board_name}": {exc}') from exc
        return int(res.modified_count)

    def push_task(self, slug: str, board_name: str, task: Task, *, expected_counter: int) -> bool:
        """
        Embed `task` and bump the board counter in one update.

        Matches only while the board counter still equals `expected_counter`,
        so two writers can never be handed the same id.
        """
        try:
            res = self._col.update_one(
                self._board_filter(slug, board_name, _id_counter=expected_counter),
                {
                    "$push": {"boards.$.tasks": task.to_doc()},
                    "$inc": {"boards.$._id_counter": 1},
                },
            )
        except PyMongoError as exc:
            raise StoreError(f"couldn't embed task {task.id_task}: {exc}") from exc
        return res.modified_count > 0

    def pull_task(self, slug: str, board_name: str, id_task: int) -> int:
        try:
            res = self._col.update_one(
                self._board_filter(slug, board_name),
                {"$pull": {"boards.$.tasks": {"id_task": id_task}}},
            )
        except PyMongoError as exc:
            raise StoreError(f"couldn't remove embedded task {id_task}: {exc}") from exc
        return int(res.modified_count)
