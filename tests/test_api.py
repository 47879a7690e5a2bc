# tests/test_api.py

import pytest

from task_app import create_app
from tasks_api.config import Settings
from tasks_api.errors import ConfigurationError, StorageError
from tasks_api.models import tasks_table


def test_list_empty(client) -> None:
    response = client.get("/tasks")

    assert response.status_code == 200
    assert response.get_json() == []


def test_task_lifecycle(client) -> None:
    response = client.post("/tasks", json={"description": "buy milk", "is_completed": False})
    assert response.status_code == 201
    assert response.get_json() == {"id": 1, "description": "buy milk", "is_completed": False}
    assert response.headers["Location"].endswith("/tasks/1")

    response = client.get("/tasks/1")
    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "description": "buy milk", "is_completed": False}

    response = client.put("/tasks/1", json={"description": "buy milk", "is_completed": True})
    assert response.status_code == 200
    assert response.get_json() == {"id": 1, "description": "buy milk", "is_completed": True}

    response = client.delete("/tasks/1")
    assert response.status_code == 204
    assert response.data == b""

    response = client.get("/tasks/1")
    assert response.status_code == 404


def test_get_missing_is_not_found(client) -> None:
    response = client.get("/tasks/999")

    assert response.status_code == 404
    assert response.get_json() == {"error": "Task 999 not found"}


def test_post_ignores_supplied_id(client) -> None:
    response = client.post("/tasks", json={"id": 77, "description": "x", "is_completed": True})

    assert response.status_code == 201
    assert response.get_json()["id"] == 1
    assert client.get("/tasks/77").status_code == 404


def test_list_returns_created_tasks(client) -> None:
    client.post("/tasks", json={"description": "a", "is_completed": False})
    client.post("/tasks", json={"description": "b"})

    body = client.get("/tasks").get_json()

    assert sorted(t["description"] for t in body) == ["a", "b"]
    assert all(t["is_completed"] is False for t in body)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"data": "not json", "content_type": "text/plain"},
        {"json": ["description"]},
        {"json": {"is_completed": True}},
        {"json": {"description": "x", "is_completed": "no"}},
    ],
)
def test_post_bad_body_is_rejected(client, kwargs) -> None:
    response = client.post("/tasks", **kwargs)

    assert response.status_code == 400
    assert "error" in response.get_json()
    assert client.get("/tasks").get_json() == []


def test_put_missing_is_not_found(client) -> None:
    response = client.put("/tasks/5", json={"description": "ghost", "is_completed": False})

    assert response.status_code == 404
    assert client.get("/tasks").get_json() == []


def test_put_path_id_is_authoritative(client) -> None:
    client.post("/tasks", json={"description": "one"})
    client.post("/tasks", json={"description": "two"})

    response = client.put("/tasks/1", json={"id": 2, "description": "changed", "is_completed": True})

    assert response.get_json() == {"id": 1, "description": "changed", "is_completed": True}
    assert client.get("/tasks/2").get_json()["description"] == "two"


@pytest.mark.parametrize("task_id", ["2147483648", "99999999999999999999"])
def test_out_of_range_id_is_not_found(client, task_id: str) -> None:
    response = client.get(f"/tasks/{task_id}")
    assert response.status_code == 404
    assert response.get_json() == {"error": f"Task {task_id} not found"}

    response = client.put(f"/tasks/{task_id}", json={"description": "x", "is_completed": True})
    assert response.status_code == 404

    assert client.delete(f"/tasks/{task_id}").status_code == 204
    assert client.get("/tasks").get_json() == []


def test_delete_twice_succeeds(client) -> None:
    client.post("/tasks", json={"description": "temp"})

    assert client.delete("/tasks/1").status_code == 204
    assert client.delete("/tasks/1").status_code == 204
    assert client.delete("/tasks/12345").status_code == 204


def test_storage_failure_is_server_error(app, client) -> None:
    with app.extensions["tasks_api"].pool.connection() as conn, conn.begin():
        tasks_table.drop(bind=conn)

    response = client.get("/tasks")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to list tasks"}


def test_unavailable_pool_is_service_unavailable(app, client) -> None:
    app.extensions["tasks_api"].pool.close()

    response = client.get("/tasks/1")

    assert response.status_code == 503
    assert response.get_json() == {"error": "Connection pool is closed"}


def test_startup_fails_when_schema_cannot_be_created(tmp_path) -> None:
    path = tmp_path / "readonly.sqlite3"
    path.touch()

    with pytest.raises(StorageError):
        create_app(Settings(database_url=f"sqlite:///file:{path}?mode=ro&uri=true"))


def test_startup_fails_without_database_url(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(ConfigurationError):
        create_app()


class TestCors:
    origin = "http://localhost:8000"

    @pytest.fixture()
    def settings(self, database_url: str) -> Settings:
        return Settings(database_url=database_url, cors_allowed_origins=(self.origin,))

    def test_allowed_origin_gets_headers(self, client) -> None:
        response = client.get("/tasks", headers={"Origin": self.origin})

        assert response.headers["Access-Control-Allow-Origin"] == self.origin
        assert response.headers["Access-Control-Allow-Credentials"] == "true"
        assert "Origin" in response.headers["Vary"]

    def test_other_origin_gets_no_headers(self, client) -> None:
        response = client.get("/tasks", headers={"Origin": "http://evil.example"})

        assert response.status_code == 200
        assert "Access-Control-Allow-Origin" not in response.headers

    def test_preflight(self, client) -> None:
        response = client.options(
            "/tasks/1",
            headers={
                "Origin": self.origin,
                "Access-Control-Request-Method": "PUT",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert "PUT" in response.headers["Access-Control-Allow-Methods"]
        assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"

    def test_error_responses_carry_headers(self, client) -> None:
        response = client.get("/tasks/999", headers={"Origin": self.origin})

        assert response.status_code == 404
        assert response.headers["Access-Control-Allow-Origin"] == self.origin

    def test_without_origins_no_headers(self, database_url: str) -> None:
        plain = create_app(Settings(database_url=database_url))
        try:
            response = plain.test_client().get("/tasks", headers={"Origin": self.origin})
        finally:
            plain.extensions["tasks_api"].pool.close()

        assert "Access-Control-Allow-Origin" not in response.headers
