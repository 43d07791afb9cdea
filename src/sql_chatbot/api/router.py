from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import FileResponse

from sql_chatbot.api.execute import router as execute_router
from sql_chatbot.api.health import chatbot_router as chatbot_health_router
from sql_chatbot.api.health import data_router as data_health_router
from sql_chatbot.api.query import router as query_router

STATIC_DIR = Path(__file__).resolve().parent.parent / "static"

chatbot_router = APIRouter()


@chatbot_router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html")


chatbot_router.include_router(query_router, tags=["query"])
chatbot_router.include_router(chatbot_health_router, tags=["health"])

data_router = APIRouter()
data_router.include_router(execute_router, prefix="/mcp", tags=["data"])
data_router.include_router(data_health_router, tags=["health"])
