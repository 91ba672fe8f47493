# src/taskboard/api/gates.py

"""
Precondition gates as FastAPI dependencies.

Each gate resolves one entity or raises NotFound; the exception handler in
app.py turns that into a 400 before the route handler ever runs. Gates are
chained (task -> board -> project) so FastAPI evaluates them in order.
"""

from __future__ import annotations

from fastapi import Depends, Request

from ..core.models import Board, Project, Task
from ..core.service import BoardService
from ..core.state import AppState


def get_state(request: Request) -> AppState:
    return request.app.state.taskboard


def get_service(state: AppState = Depends(get_state)) -> BoardService:
    return state.service


def find_project(slug: str, service: BoardService = Depends(get_service)) -> Project:
    return service.find_project(slug)


def find_board(
    slug: str,
    name: str,
    project: Project = Depends(find_project),
    service: BoardService = Depends(get_service),
) -> Board:
    return service.find_board(project.slug, name)


def find_task(
    slug: str,
    name: str,
    id: str,
    board: Board = Depends(find_board),
    service: BoardService = Depends(get_service),
) -> Task:
    return service.find_task(slug, board.name, id)
