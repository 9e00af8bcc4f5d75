"""
Error envelope, unexpected failures and configuration helpers
"""
import json

from todo_api.core.config import Settings, to_async_url
from todo_api.core.errors import ConflictError, NotFoundError, error_response
from todo_api.services.todo_service import TodoService


def test_error_response_envelope():
    response = error_response(409, "TagTodo relation already exists")
    assert response.status_code == 409
    assert json.loads(response.body) == {"error": "TagTodo relation already exists"}


def test_api_error_status_codes():
    assert NotFoundError("Todo not found").status_code == 404
    assert ConflictError("dup").status_code == 409
    assert NotFoundError("Todo not found").message == "Todo not found"


def test_to_async_url():
    assert to_async_url("postgresql://u:p@db/todos") == "postgresql+asyncpg://u:p@db/todos"
    assert to_async_url("sqlite:///./todos.db") == "sqlite+aiosqlite:///./todos.db"
    assert to_async_url("sqlite+aiosqlite:///:memory:") == "sqlite+aiosqlite:///:memory:"


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db/todos")
    monkeypatch.setenv("PORT", "9000")
    settings = Settings()
    assert settings.database_url == "postgresql://u:p@db/todos"
    assert settings.port == 9000


async def test_unknown_route_uses_envelope(client):
    r = await client.get("/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


async def test_malformed_body_is_bad_request(client):
    r = await client.put("/todos", json={"id": "not-a-number"})
    assert r.status_code == 400
    assert r.json()["error"].startswith("id:")


async def test_store_failure_is_500(lenient_client):
    # name is NOT NULL in the store
    r = await lenient_client.post("/todos", json={"description": "nameless"})
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error"}

    # the session is still usable afterwards
    r = await lenient_client.get("/todos")
    assert r.status_code == 200
    assert r.json() == []


async def test_unexpected_error_detail_is_hidden(lenient_client, monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("connection reset by peer")

    monkeypatch.setattr(TodoService, "get_all_todos", boom)

    r = await lenient_client.get("/todos")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error"}
    assert "connection reset" not in r.text


async def test_failed_commit_rolls_back_audit_row(lenient_client):
    r = await lenient_client.post("/todos", json={"name": "keep me"})
    todo_id = r.json()["id"]

    # the UPDATE log row is staged before the NOT NULL violation surfaces at commit
    r = await lenient_client.put("/todos", json={"id": todo_id, "name": None})
    assert r.status_code == 500

    r = await lenient_client.get("/logs")
    assert [(e["table_name"], e["action"], e["record_id"]) for e in r.json()] == [
        ("Todo", "CREATE", todo_id)
    ]

    r = await lenient_client.get("/todos")
    assert [t["name"] for t in r.json()] == ["keep me"]


async def test_invalid_json_body_message(client):
    r = await client.post(
        "/todos", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400
    assert r.json() == {"error": "JSON decode error"}
