# tests/test_api.py

from __future__ import annotations

from fastapi.testclient import TestClient

from taskboard.api.app import create_app


def _create_project(client: TestClient, name: str = "Awesome"):
    resp = client.post("/projects", json={"name": name})
    return resp.json().get("project"), resp


def _create_board(client: TestClient, slug: str, name: str = "todo"):
    resp = client.post(f"/projects/{slug}/boards", json={"name": name})
    return resp.json().get("board"), resp


def test_root_says_hello(client: TestClient) -> None:
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json() == {"message": "hello world"}


def test_cors_preflight_allows_any_origin(client: TestClient) -> None:
    resp = client.options(
        "/projects",
        headers={
            "Origin": "http://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "POST" in resp.headers["access-control-allow-methods"]


def test_cors_header_on_simple_request(client: TestClient) -> None:
    resp = client.get("/", headers={"Origin": "http://example.com"})
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"


def test_create_project_returns_slug(client: TestClient) -> None:
    project, resp = _create_project(client, "Awesome")
    assert resp.status_code == 200
    assert project == {"slug": "awesome", "boards": []}


def test_create_project_twice_is_rejected(client: TestClient) -> None:
    _create_project(client, "Awesome")
    project, resp = _create_project(client, "aWeSoMe")
    assert project is None
    assert resp.status_code == 400
    assert resp.json() == {"error": 'project "awesome" already exists'}


def test_get_project(client: TestClient) -> None:
    _create_project(client, "Awesome")

    resp = client.get("/projects/awesome")
    assert resp.status_code == 200
    assert resp.json()["project"] == {"slug": "awesome", "boards": []}


def test_get_missing_project(client: TestClient) -> None:
    resp = client.get("/projects/ghost")
    assert resp.status_code == 400
    assert resp.json() == {"error": 'project "ghost" does not exist'}


def test_create_board(client: TestClient) -> None:
    project, _ = _create_project(client)

    board, resp = _create_board(client, project["slug"], "todo")
    assert resp.status_code == 200
    assert board == {"name": "todo", "tasks": [], "_id_counter": 0}

    stored = client.get("/projects/awesome").json()["project"]
    assert [b["name"] for b in stored["boards"]] == ["todo"]


def test_duplicate_board_in_same_project_fails(client: TestClient) -> None:
    project, _ = _create_project(client)

    _create_board(client, project["slug"], "test")
    board, resp = _create_board(client, project["slug"], "test")

    assert board is None
    assert resp.status_code == 400
    assert resp.json()["error"] == 'board "test" inside project "awesome" already exists'


def test_same_board_name_in_other_project_is_allowed(client: TestClient) -> None:
    _create_project(client, "One")
    _create_project(client, "Two")

    _, first = _create_board(client, "one", "todo")
    _, second = _create_board(client, "two", "todo")
    assert first.status_code == 200
    assert second.status_code == 200


def test_create_board_in_missing_project(client: TestClient) -> None:
    board, resp = _create_board(client, "ghost", "todo")
    assert board is None
    assert resp.status_code == 400
    assert resp.json()["error"] == 'project "ghost" does not exist'


def test_delete_project(client: TestClient) -> None:
    project, _ = _create_project(client)

    resp = client.delete(f"/projects/{project['slug']}")
    assert resp.status_code == 200
    assert resp.json()["project"]["slug"] == "awesome"

    assert client.get("/projects/awesome").status_code == 400


def test_delete_board(client: TestClient) -> None:
    project, _ = _create_project(client)
    _create_board(client, project["slug"], "todo")

    resp = client.delete("/projects/awesome/boards/todo")
    assert resp.status_code == 200
    assert resp.json()["board"]["name"] == "todo"

    stored = client.get("/projects/awesome").json()["project"]
    assert [b for b in stored["boards"] if b["name"] == "todo"] == []


def test_delete_missing_board(client: TestClient) -> None:
    _create_project(client)

    resp = client.delete("/projects/awesome/boards/todo")
    assert resp.status_code == 400
    assert "board" not in resp.json()
    assert resp.json()["error"] == 'board "todo" inside project "awesome" does not exist'


def test_create_task(client: TestClient) -> None:
    _create_project(client)
    _create_board(client, "awesome", "todo")

    resp = client.post(
        "/projects/awesome/boards/todo/tasks", json={"description": "Kilroy Was Here"}
    )
    assert resp.status_code == 200
    assert resp.json()["task"] == {"id_task": 0, "description": "Kilroy Was Here"}

    board = client.get("/projects/awesome").json()["project"]["boards"][0]
    assert board["tasks"] == [{"id_task": 0, "description": "Kilroy Was Here"}]
    assert board["_id_counter"] == 1


def test_create_task_in_missing_board(client: TestClient) -> None:
    _create_project(client)

    resp = client.post("/projects/awesome/boards/todo/tasks", json={"description": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"] == 'board "todo" inside project "awesome" does not exist'


def test_delete_task_removes_it_from_the_index(client: TestClient, db) -> None:
    project, _ = _create_project(client)
    board, _ = _create_board(client, project["slug"], "todo")

    # Extra body fields are ignored.
    created = client.post(
        f"/projects/{project['slug']}/boards/{board['name']}/tasks",
        json={"description": "Kilroy Was Here", "test": "test"},
    ).json()["task"]
    id_task = created["id_task"]
    assert id_task == 0

    resp = client.delete(f"/projects/awesome/boards/todo/tasks/{id_task}")
    assert resp.status_code == 200
    assert resp.json()["task"] == {"id_task": 0, "description": "Kilroy Was Here"}

    no_task = db["tasks"].find_one(
        {"id_task": id_task, "project_slug": "awesome", "board_name": "todo"}
    )
    assert no_task is None
    board_after = client.get("/projects/awesome").json()["project"]["boards"][0]
    assert board_after["tasks"] == []


def test_delete_missing_task(client: TestClient) -> None:
    _create_project(client)
    _create_board(client, "awesome", "todo")

    resp = client.delete("/projects/awesome/boards/todo/tasks/42")
    assert resp.status_code == 400
    assert "task" not in resp.json()
    assert resp.json()["error"] == (
        'task id "42" from board "todo" inside project "awesome" does not exist'
    )


def test_delete_task_with_non_numeric_id(client: TestClient) -> None:
    _create_project(client)
    _create_board(client, "awesome", "todo")

    resp = client.delete("/projects/awesome/boards/todo/tasks/abc")
    assert resp.status_code == 400


def test_delete_task_with_oversized_id(client: TestClient) -> None:
    _create_project(client)
    _create_board(client, "awesome", "todo")

    resp = client.delete("/projects/awesome/boards/todo/tasks/99999999999999999999")
    assert resp.status_code == 400
    assert resp.json() == {
        "error": 'task id "99999999999999999999" from board "todo" '
        'inside project "awesome" does not exist'
    }


def test_task_ids_not_reused_after_delete(client: TestClient) -> None:
    _create_project(client)
    _create_board(client, "awesome", "todo")
    url = "/projects/awesome/boards/todo/tasks"

    assert client.post(url, json={"description": "a"}).json()["task"]["id_task"] == 0
    assert client.delete(f"{url}/0").status_code == 200
    assert client.post(url, json={"description": "b"}).json()["task"]["id_task"] == 1


def test_gates_run_in_order(client: TestClient) -> None:
    # Missing project is reported before the (also missing) board or task.
    resp = client.delete("/projects/ghost/boards/todo/tasks/0")
    assert resp.status_code == 400
    assert resp.json()["error"] == 'project "ghost" does not exist'


def test_missing_body_field_is_rejected(client: TestClient) -> None:
    resp = client.post("/projects", json={})
    assert resp.status_code == 422


def test_form_encoded_body_is_rejected(client: TestClient) -> None:
    # Bodies are JSON only.
    resp = client.post("/projects", data={"name": "Awesome"})
    assert resp.status_code == 422
    assert client.get("/projects/awesome").status_code == 400


def test_end_to_end_scenario(client: TestClient, db) -> None:
    project, _ = _create_project(client, "Awesome")
    assert project["slug"] == "awesome"

    board, _ = _create_board(client, "awesome", "todo")
    assert board == {"name": "todo", "tasks": [], "_id_counter": 0}

    task = client.post(
        "/projects/awesome/boards/todo/tasks", json={"description": "Kilroy Was Here"}
    ).json()["task"]
    assert task == {"id_task": 0, "description": "Kilroy Was Here"}

    assert client.delete("/projects/awesome/boards/todo/tasks/0").status_code == 200
    gone = db["tasks"].find_one({"id_task": 0, "project_slug": "awesome", "board_name": "todo"})
    assert gone is None
    assert client.delete("/projects/awesome/boards/todo/tasks/42").status_code == 400


# ---- store failures surface as 500 ----


def test_store_failure_on_delete_project_is_500(fake_state) -> None:
    client = TestClient(create_app(fake_state))
    client.post("/projects", json={"name": "Awesome"})
    fake_state.projects.noop.add("delete")

    resp = client.delete("/projects/awesome")
    assert resp.status_code == 500
    assert resp.json() == {
        "error": 'couldn\'t delete project "awesome". Database request failed'
    }


def test_partial_task_create_is_500(fake_state) -> None:
    client = TestClient(create_app(fake_state))
    client.post("/projects", json={"name": "Awesome"})
    client.post("/projects/awesome/boards", json={"name": "todo"})
    fake_state.task_index.failing.add("insert")

    resp = client.post("/projects/awesome/boards/todo/tasks", json={"description": "x"})
    assert resp.status_code == 500
    assert "Database request failed" in resp.json()["error"]


def test_store_failure_on_delete_board_is_500(fake_state) -> None:
    client = TestClient(create_app(fake_state))
    client.post("/projects", json={"name": "Awesome"})
    client.post("/projects/awesome/boards", json={"name": "todo"})
    fake_state.projects.noop.add("pull_board")

    resp = client.delete("/projects/awesome/boards/todo")
    assert resp.status_code == 500
    assert resp.json() == {
        "error": 'couldn\'t delete board "todo" from project "awesome". Database request failed'
    }


def test_partial_task_delete_is_500(fake_state) -> None:
    client = TestClient(create_app(fake_state))
    client.post("/projects", json={"name": "Awesome"})
    client.post("/projects/awesome/boards", json={"name": "todo"})
    client.post("/projects/awesome/boards/todo/tasks", json={"description": "x"})
    fake_state.task_index.noop.add("delete")

    resp = client.delete("/projects/awesome/boards/todo/tasks/0")
    assert resp.status_code == 500
    assert resp.json() == {
        "error": 'couldn\'t delete task with id "0" inside board "todo" '
        'from project "awesome". Database request failed'
    }


# ---- index purge failures after a successful delete ----


def test_delete_project_succeeds_when_index_purge_fails(fake_state) -> None:
    client = TestClient(create_app(fake_state))
    client.post("/projects", json={"name": "Awesome"})
    fake_state.task_index.failing.add("delete_for_project")

    resp = client.delete("/projects/awesome")
    assert resp.status_code == 200
    assert resp.json()["project"]["slug"] == "awesome"
    assert client.get("/projects/awesome").status_code == 400


def test_delete_board_succeeds_when_index_purge_fails(fake_state) -> None:
    client = TestClient(create_app(fake_state))
    client.post("/projects", json={"name": "Awesome"})
    client.post("/projects/awesome/boards", json={"name": "todo"})
    fake_state.task_index.failing.add("delete_for_board")

    resp = client.delete("/projects/awesome/boards/todo")
    assert resp.status_code == 200
    assert resp.json()["board"]["name"] == "todo"
    assert client.get("/projects/awesome").json()["project"]["boards"] == []
