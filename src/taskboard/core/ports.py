# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The service depends on Protocols instead of the Mongo implementations.
This keeps the store swappable and lets tests drive failure paths with fakes.

Both repositories raise StoreError when the underlying store call fails.
Counts/booleans returned by write methods report how many documents the
store says it touched; interpreting "zero" is up to the service.
"""

from typing import Protocol

from .models import Board, IndexedTask, Project, Task


class ProjectRepo(Protocol):
    """The `projects` collection: each project embeds its boards and their tasks."""

    def get(self, slug: str) -> Project | None: ...
    def insert(self, project: Project) -> None: ...  # Conflict on duplicate slug
    def delete(self, slug: str) -> int: ...

    # Board level
    def find_with_board(self, slug: str, board_name: str) -> Project | None: ...
    def push_board(self, slug: str, board: Board) -> bool: ...
    def pull_board(self, slug: str, board_name: str) -> int: ...

    # Embedded task level
    def push_task(self, slug: str, board_name: str, task: Task, *, expected_counter: int) -> bool: ...
    def pull_task(self, slug: str, board_name: str, id_task: int) -> int: ...


class TaskIndexRepo(Protocol):
    """The flat `tasks` collection, one document per task."""

    def get(self, project_slug: str, board_name: str, id_task: int) -> IndexedTask | None: ...
    def insert(self, task: IndexedTask) -> None: ...
    def delete(self, project_slug: str, board_name: str, id_task: int) -> int: ...
    def delete_for_board(self, project_slug: str, board_name: str) -> int: ...
    def delete_for_project(self, project_slug: str) -> int: ...
