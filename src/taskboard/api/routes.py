# src/taskboard/api/routes.py

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ..core.models import Board, Project, Task
from ..core.service import BoardService
from .gates import find_board, find_project, find_task, get_service
from .schemas import (
    CreateBoardRequest,
    CreateProjectRequest,
    CreateTaskRequest,
    board_body,
    project_body,
    task_body,
)

router = APIRouter(prefix="/projects", tags=["projects"])


@router.post("")
def create_project(
    body: CreateProjectRequest,
    service: BoardService = Depends(get_service),
) -> dict[str, Any]:
    return project_body(service.create_project(body.name))


@router.get("/{slug}")
def get_project(project: Project = Depends(find_project)) -> dict[str, Any]:
    return project_body(project)


@router.delete("/{slug}")
def delete_project(
    project: Project = Depends(find_project),
    service: BoardService = Depends(get_service),
) -> dict[str, Any]:
    return project_body(service.delete_project(project))


@router.post("/{slug}/boards")
def create_board(
    body: CreateBoardRequest,
    project: Project = Depends(find_project),
    service: BoardService = Depends(get_service),
) -> dict[str, Any]:
    return board_body(service.create_board(project, body.name))


@router.delete("/{slug}/boards/{name}")
def delete_board(
    project: Project = Depends(find_project),
    board: Board = Depends(find_board),
    service: BoardService = Depends(get_service),
) -> dict[str, Any]:
    return board_body(service.delete_board(project, board))


@router.post("/{slug}/boards/{name}/tasks")
def create_task(
    body: CreateTaskRequest,
    project: Project = Depends(find_project),
    board: Board = Depends(find_board),
    service: BoardService = Depends(get_service),
) -> dict[str, Any]:
    return task_body(service.create_task(project, board, body.description))


@router.delete("/{slug}/boards/{name}/tasks/{id}")
def delete_task(
    project: Project = Depends(find_project),
    board: Board = Depends(find_board),
    task: Task = Depends(find_task),
    service: BoardService = Depends(get_service),
) -> dict[str, Any]:
    return task_body(service.delete_task(project, board, task))
