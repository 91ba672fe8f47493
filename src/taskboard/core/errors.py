# src/taskboard/core/errors.py

"""
Error taxonomy shared by the service and the HTTP layer.

Each error carries the HTTP status it is reported with; the message is
returned to the client verbatim as {"error": message}.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .service import DualWrite


class TaskboardError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFound(TaskboardError):
    """A referenced project, board or task does not exist."""

    status_code = 400


class Conflict(TaskboardError):
    """Duplicate project slug, or duplicate board name within a project."""

    status_code = 400


class StoreError(TaskboardError):
    """
    A store call failed, or a write affected nothing although its
    preconditions passed.

    For operations that write both collections, `outcome` records which of
    the two writes actually landed.
    """

    status_code = 500

    def __init__(self, message: str, *, outcome: DualWrite | None = None) -> None:
        super().__init__(message)
        self.outcome = outcome


class StoreUnavailable(StoreError):
    """The document store could not be reached at startup."""
