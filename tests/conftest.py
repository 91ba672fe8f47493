# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import mongomock
import pytest
from fastapi.testclient import TestClient

from taskboard.api.app import create_app
from taskboard.cli.bootstrap import build_state
from taskboard.core.service import BoardService
from taskboard.core.state import AppState

from .fakes import FakeProjectRepo, FakeTaskIndex


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and create_app.

    We intentionally use a SimpleNamespace rather than reading the real
    environment, to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_dir=tmp_path / "logs",
        database_name="taskboard_test",
        test_mode=True,
    )


@pytest.fixture()
def db(settings: SimpleNamespace):
    """In-memory MongoDB database (fresh per test)."""
    client = mongomock.MongoClient()
    yield client[settings.database_name]
    client.close()


@pytest.fixture()
def state(settings: SimpleNamespace, db) -> AppState:
    """
    AppState wired with the real Mongo repositories over mongomock.

    The repositories' query/update documents are part of what we want to
    test, so only the server is faked here.
    """
    return build_state(db, settings=settings)


@pytest.fixture()
def service(state: AppState) -> BoardService:
    return state.service


@pytest.fixture()
def client(state: AppState) -> TestClient:
    return TestClient(create_app(state))


@pytest.fixture()
def fake_state(settings: SimpleNamespace) -> AppState:
    """AppState over in-memory fakes whose writes can be made to fail."""
    projects = FakeProjectRepo()
    task_index = FakeTaskIndex()
    return AppState(
        settings=settings,
        projects=projects,
        task_index=task_index,
        service=BoardService(projects, task_index),
    )
