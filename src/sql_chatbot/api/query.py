from __future__ import annotations

from fastapi import APIRouter, Request

from sql_chatbot.models.requests import UserQueryRequest
from sql_chatbot.models.responses import ErrorResponse, QueryResponse

router = APIRouter()


@router.post(
    "/query",
    response_model=QueryResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def submit_query(body: UserQueryRequest, request: Request) -> QueryResponse:
    """Answer a natural language question, querying sales data when needed."""
    settings = request.app.state.settings
    question = body.text(max_length=settings.max_user_query_length)
    return await request.app.state.orchestrator.handle(question)
