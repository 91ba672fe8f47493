# src/taskboard/core/models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def slugify(name: str) -> str:
    """Project slug: the lowercased display name."""
    return name.lower()


@dataclass(slots=True)
class Task:
    """Minimal task form, as embedded in Board.tasks."""

    id_task: int
    description: str

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> Task:
        return cls(id_task=int(doc["id_task"]), description=str(doc.get("description", "")))

    def to_doc(self) -> dict[str, Any]:
        return {"id_task": self.id_task, "description": self.description}


@dataclass(slots=True)
class IndexedTask:
    """
    Indexed task form stored in the flat `tasks` collection.

    Carries the parent references so a task can be found without loading
    its project document.
    """

    id_task: int
    description: str
    project_slug: str
    board_name: str

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> IndexedTask:
        return cls(
            id_task=int(doc["id_task"]),
            description=str(doc.get("description", "")),
            project_slug=str(doc["project_slug"]),
            board_name=str(doc["board_name"]),
        )

    @classmethod
    def for_board(cls, task: Task, *, project_slug: str, board_name: str) -> IndexedTask:
        return cls(
            id_task=task.id_task,
            description=task.description,
            project_slug=project_slug,
            board_name=board_name,
        )

    def minimal(self) -> Task:
        return Task(id_task=self.id_task, description=self.description)

    def to_doc(self) -> dict[str, Any]:
        return {
            "id_task": self.id_task,
            "description": self.description,
            "project_slug": self.project_slug,
            "board_name": self.board_name,
        }


@dataclass(slots=True)
class Board:
    name: str
    tasks: list[Task] = field(default_factory=list)
    # Next task id; only ever incremented, so ids are never reused in a board.
    id_counter: int = 0

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> Board:
        return cls(
            name=str(doc["name"]),
            tasks=[Task.from_doc(t) for t in doc.get("tasks") or []],
            id_counter=int(doc.get("_id_counter") or 0),
        )

    def to_doc(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "tasks": [t.to_doc() for t in self.tasks],
            "_id_counter": self.id_counter,
        }


@dataclass(slots=True)
class Project:
    slug: str
    boards: list[Board] = field(default_factory=list)

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> Project:
        return cls(
            slug=str(doc["slug"]),
            boards=[Board.from_doc(b) for b in doc.get("boards") or []],
        )

    def board(self, name: str) -> Board | None:
        for b in self.boards:
            if b.name == name:
                return b
        return None

    def to_doc(self) -> dict[str, Any]:
        return {"slug": self.slug, "boards": [b.to_doc() for b in self.boards]}
