# src/taskboard/core/service.py

"""
Board service: every CRUD operation on projects, boards and tasks.

Operations come in two flavours, mirroring the HTTP pipeline:
- lookups (find_project / find_board / find_task) that raise NotFound,
- terminal operations that receive the entities the lookups resolved.

Task data lives in two places (the project document and the flat task
index). The service issues both writes itself; they are NOT atomic across
collections and the outcome is reported as a DualWrite.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import Conflict, NotFound, StoreError
from .models import Board, IndexedTask, Project, Task, slugify
from .ports import ProjectRepo, TaskIndexRepo

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DualWrite:
    """Which of the two task views a create/delete actually changed."""

    structure: bool
    index: bool

    @property
    def complete(self) -> bool:
        return self.structure and self.index

    @property
    def partial(self) -> bool:
        return self.structure != self.index


_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_task_id(raw: str | int) -> int | None:
    # Ids outside int64 can't be stored as BSON integers, so no task has one.
    if isinstance(raw, int):
        value = raw
    else:
        try:
            value = int(str(raw).strip())
        except ValueError:
            return None
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


class BoardService:
    def __init__(self, projects: ProjectRepo, task_index: TaskIndexRepo) -> None:
        self.projects = projects
        self.task_index = task_index

    # ---- lookups (precondition gates) ----

    def find_project(self, slug: str) -> Project:
        project = self.projects.get(slug)
        if project is None:
            raise NotFound(f'project "{slug}" does not exist')
        return project

    def find_board(self, slug: str, name: str) -> Board:
        project = self.projects.find_with_board(slug, name)
        board = project.board(name) if project is not None else None
        if board is None:
            raise NotFound(f'board "{name}" inside project "{slug}" does not exist')
        return board

    def find_task(self, slug: str, name: str, raw_id: str | int) -> Task:
        id_task = parse_task_id(raw_id)
        indexed = None
        if id_task is not None:
            indexed = self.task_index.get(slug, name, id_task)
        if indexed is None:
            raise NotFound(
                f'task id "{raw_id}" from board "{name}" inside project "{slug}" does not exist'
            )
        # Callers only ever see the minimal form.
        return indexed.minimal()

    # ---- projects ----

    def create_project(self, name: str) -> Project:
        slug = slugify(name)
        if self.projects.get(slug) is not None:
            raise Conflict(f'project "{slug}" already exists')

        project = Project(slug=slug, boards=[])
        self.projects.insert(project)
        logger.info("Project created slug=%s", slug)
        return project

    def get_project(self, slug: str) -> Project:
        return self.find_project(slug)

    def delete_project(self, project: Project) -> Project:
        deleted = self.projects.delete(project.slug)
        if deleted == 0:
            raise StoreError(
                f'couldn\'t delete project "{project.slug}". Database request failed'
            )

        # The project is already gone; a failed purge only leaves stale index rows.
        try:
            purged = self.task_index.delete_for_project(project.slug)
        except StoreError as exc:
            logger.warning(
                "Indexed tasks not purged after project delete slug=%s: %s",
                project.slug,
                exc.message,
            )
            purged = None
        logger.info("Project deleted slug=%s indexed_tasks_removed=%s", project.slug, purged)
        return project

    # ---- boards ----

    def create_board(self, project: Project, name: str) -> Board:
        if self.projects.find_with_board(project.slug, name) is not None:
            raise Conflict(f'board "{name}" inside project "{project.slug}" already exists')

        board = Board(name=name, tasks=[], id_counter=0)
        # The push is filtered on "no board with this name", so a concurrent
        # creator that slipped past the check above cannot produce a duplicate.
        if not self.projects.push_board(project.slug, board):
            raise Conflict(f'board "{name}" inside project "{project.slug}" already exists')

        project.boards.append(board)
        logger.info("Board created project=%s board=%s", project.slug, name)
        return board

    def delete_board(self, project: Project, board: Board) -> Board:
        modified = self.projects.pull_board(project.slug, board.name)
        if modified == 0:
            raise StoreError(
                f'couldn\'t delete board "{board.name}" from project "{project.slug}". '
                "Database request failed"
            )

        try:
            purged = self.task_index.delete_for_board(project.slug, board.name)
        except StoreError as exc:
            logger.warning(
                "Indexed tasks not purged after board delete project=%s board=%s: %s",
                project.slug,
                board.name,
                exc.message,
            )
            purged = None
        logger.info(
            "Board deleted project=%s board=%s indexed_tasks_removed=%s",
            project.slug,
            board.name,
            purged,
        )
        return board

    # ---- tasks ----

    def create_task(self, project: Project, board: Board, description: str) -> Task:
        task = Task(id_task=board.id_counter, description=description)
        failure = (
            f'couldn\'t create task "{description}" in board "{board.name}" '
            f'from project "{project.slug}". Database request failed'
        )

        try:
            # Compare-and-set on the counter: if another request took this id
            # first, nothing matches and nothing is written.
            pushed = self.projects.push_task(
                project.slug, board.name, task, expected_counter=board.id_counter
            )
        except StoreError as exc:
            raise StoreError(failure, outcome=DualWrite(structure=False, index=False)) from exc
        if not pushed:
            raise StoreError(failure, outcome=DualWrite(structure=False, index=False))

        indexed = IndexedTask.for_board(task, project_slug=project.slug, board_name=board.name)
        try:
            self.task_index.insert(indexed)
        except StoreError as exc:
            outcome = DualWrite(structure=True, index=False)
            logger.warning(
                "Partial task create project=%s board=%s id_task=%s outcome=%s",
                project.slug,
                board.name,
                task.id_task,
                outcome,
            )
            raise StoreError(failure, outcome=outcome) from exc

        board.tasks.append(task)
        board.id_counter += 1
        logger.info(
            "Task created project=%s board=%s id_task=%s", project.slug, board.name, task.id_task
        )
        return task

    def delete_task(self, project: Project, board: Board, task: Task) -> Task:
        # Both writes are attempted; removing the index entry is safe even if
        # the embedded task is already gone.
        structure = self._attempt(
            lambda: self.projects.pull_task(project.slug, board.name, task.id_task) > 0
        )
        index = self._attempt(
            lambda: self.task_index.delete(project.slug, board.name, task.id_task) > 0
        )

        outcome = DualWrite(structure=structure, index=index)
        if not outcome.complete:
            if outcome.partial:
                logger.warning(
                    "Partial task delete project=%s board=%s id_task=%s outcome=%s",
                    project.slug,
                    board.name,
                    task.id_task,
                    outcome,
                )
            raise StoreError(
                f'couldn\'t delete task with id "{task.id_task}" inside board "{board.name}" '
                f'from project "{project.slug}". Database request failed',
                outcome=outcome,
            )

        logger.info(
            "Task deleted project=%s board=%s id_task=%s", project.slug, board.name, task.id_task
        )
        return task

    @staticmethod
    def _attempt(write) -> bool:
        try:
            return bool(write())
        except StoreError:
            logger.exception("Store write failed")
            return False
