# src/taskboard/api/app.py

"""
HTTP application.

create_app() receives a fully built AppState (see cli/bootstrap.py) and
exposes it to handlers through app.state; it never opens connections itself.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..core.errors import StoreError, TaskboardError
from ..core.state import AppState
from .routes import router as projects_router

logger = logging.getLogger(__name__)


async def _taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(state: AppState) -> FastAPI:
    settings = state.settings
    app = FastAPI(title=str(getattr(settings, "app_name", "taskboard")))
    app.state.taskboard = state

    # Any origin may call the API, with any method or header.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(TaskboardError, _taskboard_error_handler)

    @app.get("/")
    def hello() -> dict[str, str]:
        return {"message": "hello world"}

    app.include_router(projects_router)
    return app
