from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager

import structlog
from fastapi import FastAPI
from sqlalchemy.exc import SQLAlchemyError

from sql_chatbot.api.errors import register_error_handlers
from sql_chatbot.api.router import chatbot_router, data_router
from sql_chatbot.config import Settings, get_settings
from sql_chatbot.db.remote import create_data_service_client
from sql_chatbot.db.sqlite import SqliteBackend
from sql_chatbot.llm.client import create_completion_client
from sql_chatbot.llm.sql_generator import SQLGenerator
from sql_chatbot.logging import setup_logging
from sql_chatbot.mcp.tools import create_mcp_server
from sql_chatbot.observability.metrics import ChatbotMetrics
from sql_chatbot.pipeline.orchestrator import QueryOrchestrator

logger = structlog.get_logger()


def create_chatbot_app(settings: Settings | None = None) -> FastAPI:
    """Front door: natural-language questions in, phrased answers out."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, service="chatbot")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        completion_client = create_completion_client(settings)
        data_client = create_data_service_client(settings)
        metrics = ChatbotMetrics()

        orchestrator = QueryOrchestrator(
            completion_client=completion_client,
            data_client=data_client,
            sql_generator=SQLGenerator(completion_client),
            metrics=metrics,
        )

        app.state.settings = settings
        app.state.completion_client = completion_client
        app.state.data_client = data_client
        app.state.metrics = metrics
        app.state.orchestrator = orchestrator
        logger.info("chatbot_started", data_service_url=settings.data_service_url)

        yield

        await data_client.aclose()
        await completion_client.aclose()
        logger.info("chatbot_stopped")

    app = FastAPI(
        title="SQL Chatbot",
        version="0.1.0",
        description="Answers questions about sales data by generating SQL with a local language model",
        lifespan=lifespan,
    )
    register_error_handlers(app)
    app.include_router(chatbot_router)
    return app


def create_data_app(settings: Settings | None = None) -> FastAPI:
    """Data service: validated read-only SQL against the sales database."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, service="data")
    mcp_server = create_mcp_server()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db_backend: SqliteBackend | None = SqliteBackend(
            settings.sqlite_url, max_rows=settings.max_result_rows
        )
        try:
            await db_backend.connect()
        except SQLAlchemyError as e:
            # Keep serving so /health and queries can report 503
            logger.error("database_connect_failed", url=settings.sqlite_url, error=str(e))
            db_backend = None

        app.state.settings = settings
        app.state.db_backend = db_backend
        mcp_server.state = app.state  # type: ignore[attr-defined]

        yield

        if db_backend is not None:
            await db_backend.close()

    mcp_http_app = mcp_server.http_app(path="/")

    @asynccontextmanager
    async def combined_lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            await stack.enter_async_context(lifespan(app))
            await stack.enter_async_context(mcp_http_app.lifespan(mcp_http_app))
            yield

    app = FastAPI(
        title="SQL Chatbot Data Service",
        version="0.1.0",
        description="Executes validated read-only SQL against the sales database",
        lifespan=combined_lifespan,
    )
    register_error_handlers(app)
    app.include_router(data_router)
    app.mount("/tools", mcp_http_app)
    return app
