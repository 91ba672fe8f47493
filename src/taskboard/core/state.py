# src/taskboard/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .ports import ProjectRepo, TaskIndexRepo
from .service import BoardService

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """
    Everything a request handler may touch, built once by the composition root.

    Route handlers receive this through the FastAPI app instead of reading
    a module-level connection.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: object

    projects: ProjectRepo
    task_index: TaskIndexRepo
    service: BoardService

    # pymongo.MongoClient (or a test double); owned here so shutdown can close it.
    client: Any = None

    def close(self) -> None:
        """Best-effort shutdown (no exceptions should escape)."""
        if self.client is None:
            return
        try:
            self.client.close()
        except Exception:
            logger.debug("Store client close failed.", exc_info=True)
