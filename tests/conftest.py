from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

TEST_DB = Path(tempfile.gettempdir()) / "taskboard_test.db"

# must be in place before the app (and its engine) is imported
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{TEST_DB}"

from taskboard.db.base import Base  # noqa: E402
from taskboard.db.session import async_session, engine  # noqa: E402
from taskboard.main import app  # noqa: E402


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def db(schema):
    async with async_session() as session:
        yield session


@pytest.fixture
async def client(schema) -> AsyncClient:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://localhost") as c:
        yield c


async def create_board(client: AsyncClient, name: str = "Sprint board") -> dict:
    res = await client.post("/boards", json={"boardName": name})
    assert res.status_code == 201, res.text
    return res.json()


async def create_column(client: AsyncClient, name: str = "To do", board_id: str | None = None) -> dict:
    payload: dict = {"columnName": name}
    if board_id:
        payload["boardId"] = board_id
    res = await client.post("/columns", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


async def create_ticket(
    client: AsyncClient,
    name: str = "Write report",
    *,
    priority: str = "critical",
    column_id: str | None = None,
    description: str | None = None,
) -> dict:
    payload: dict = {"ticketName": name, "priority": priority}
    if column_id:
        payload["columnId"] = column_id
    if description is not None:
        payload["description"] = description
    res = await client.post("/tickets", json=payload)
    assert res.status_code == 201, res.text
    return res.json()
