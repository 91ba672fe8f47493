# src/taskboard/api/schemas.py

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from ..core.models import Board, Project, Task


class CreateProjectRequest(BaseModel):
    name: str


class CreateBoardRequest(BaseModel):
    name: str


class CreateTaskRequest(BaseModel):
    description: str


# Responses are plain dicts shaped like the stored documents, minus Mongo's _id.

def project_body(project: Project) -> dict[str, Any]:
    return {"project": project.to_doc()}


def board_body(board: Board) -> dict[str, Any]:
    return {"board": board.to_doc()}


def task_body(task: Task) -> dict[str, Any]:
    return {"task": task.to_doc()}
