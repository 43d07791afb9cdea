from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from sql_chatbot.models.responses import ChatbotHealthResponse, DataHealthResponse

chatbot_router = APIRouter()
data_router = APIRouter()


@chatbot_router.get("/health", response_model=ChatbotHealthResponse)
async def chatbot_health(request: Request) -> ChatbotHealthResponse:
    """Liveness check with request counters."""
    metrics = getattr(request.app.state, "metrics", None)
    stats = await metrics.get_stats() if metrics else {}
    return ChatbotHealthResponse(metrics=stats)


@data_router.get("/health", response_model=DataHealthResponse)
async def data_health(request: Request) -> DataHealthResponse | JSONResponse:
    """Liveness check that also pings the database."""
    db_backend = getattr(request.app.state, "db_backend", None)
    if db_backend is None or not await db_backend.ping():
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "error": "Database not connected"},
        )
    return DataHealthResponse()
