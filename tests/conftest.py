"""
Test fixtures - in-memory SQLite database + HTTP client bound to the app
"""
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlmodel import SQLModel

from todo_api.core.config import Settings
from todo_api.database import build_engine, build_session_factory, get_db
from todo_api.main import create_app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture()
def app():
    return create_app(Settings(database_url=TEST_DATABASE_URL, create_tables=False))


@pytest_asyncio.fixture()
async def db_session():
    """Create a fresh in-memory SQLite database for each test"""
    engine = build_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = build_session_factory(engine)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


def _override_db(app, db_session):
    async def override_get_db():
        try:
            yield db_session
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db


@pytest_asyncio.fixture()
async def client(app, db_session):
    """httpx AsyncClient bound to the FastAPI app"""
    _override_db(app, db_session)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def lenient_client(app, db_session):
    """Client that returns 500 responses instead of re-raising server errors"""
    _override_db(app, db_session)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def todo(client):
    r = await client.post("/todos", json={"name": "Buy bread", "description": "whole grain"})
    assert r.status_code == 201
    return r.json()


@pytest_asyncio.fixture()
async def tag(client):
    r = await client.post("/tags", json={"name": "errand", "color": "#ff0000"})
    assert r.status_code == 201
    return r.json()["tag"]
