from __future__ import annotations

import sqlite3
from pathlib import Path
from unittest.mock import patch

import pytest
from asgi_lifespan import LifespanManager
from httpx import ASGITransport, AsyncClient

from sql_chatbot.config import Settings
from sql_chatbot.errors import CompletionError

SALES_ROWS = [
    (1, "Laptop", "2024-01-15", 1200.0),
    (2, "Mouse", "2024-01-16", 25.5),
    (3, "Monitor", "2024-02-01", 300.0),
    (4, "Keyboard", "2024-02-10", 75.0),
    (5, "Laptop", "2024-03-05", 1350.0),
]


class FakeCompletionClient:
    """Completion client returning scripted replies and recording prompts.

    A reply may be a string or an exception instance to raise.
    """

    def __init__(self, replies: list[str | Exception] | None = None) -> None:
        self.replies = list(replies or [])
        self.prompts: list[str] = []
        self.closed = False

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.replies:
            raise CompletionError("Completion service unreachable", details="no scripted reply")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def aclose(self) -> None:
        self.closed = True


def create_sales_db(path: Path, rows: list[tuple] | None = None) -> Path:
    """Create a SQLite file holding the sales table."""
    conn = sqlite3.connect(path)
    try:
        conn.execute(
            "CREATE TABLE sales ("
            "id INTEGER PRIMARY KEY, product_name TEXT, sale_date TEXT, sales_amount REAL)"
        )
        conn.executemany(
            "INSERT INTO sales (id, product_name, sale_date, sales_amount) VALUES (?, ?, ?, ?)",
            SALES_ROWS if rows is None else rows,
        )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set environment variables for testing."""
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    monkeypatch.setenv("OLLAMA_BASE_URL", "http://ollama.test")
    monkeypatch.setenv("DATA_SERVICE_URL", "http://data.test")


@pytest.fixture
def sales_db(tmp_path: Path) -> Path:
    return create_sales_db(tmp_path / "sales.db")


@pytest.fixture
def settings(sales_db: Path) -> Settings:
    return Settings(_env_file=None, sqlite_url=f"sqlite+aiosqlite:///{sales_db}")


@pytest.fixture
async def data_app(settings: Settings):
    """Data service app with its lifespan running."""
    from sql_chatbot.app import create_data_app

    app = create_data_app(settings)
    async with LifespanManager(app):
        yield app


@pytest.fixture
async def data_client(data_app) -> AsyncClient:
    transport = ASGITransport(app=data_app)
    async with AsyncClient(transport=transport, base_url="http://data.test") as c:
        yield c


@pytest.fixture
def fake_llm() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
async def chatbot_client(settings: Settings, data_app, fake_llm: FakeCompletionClient) -> AsyncClient:
    """Front-door client wired to the fake LLM and the in-process data service."""
    from sql_chatbot.db.remote import DataServiceClient

    data_service = DataServiceClient(
        base_url="http://data.test", transport=ASGITransport(app=data_app)
    )
    with (
        patch("sql_chatbot.app.create_completion_client", return_value=fake_llm),
        patch("sql_chatbot.app.create_data_service_client", return_value=data_service),
    ):
        from sql_chatbot.app import create_chatbot_app

        app = create_chatbot_app(settings)
        async with LifespanManager(app):
            async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
                yield c
