from __future__ import annotations

from fastapi import APIRouter, Request

from sql_chatbot.errors import ClientInputError, DatabaseUnavailableError, SqlValidationError
from sql_chatbot.models.requests import ExecuteQueryRequest
from sql_chatbot.models.responses import ErrorResponse, ExecuteQueryResponse, SchemaResponse
from sql_chatbot.sql.validators import validate_read_only_sql

router = APIRouter()

_ERRORS = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


@router.post("/executeQuery", response_model=ExecuteQueryResponse, responses=_ERRORS)
async def execute_query(body: ExecuteQueryRequest, request: Request) -> ExecuteQueryResponse:
    """Execute a read-only SELECT. Results are capped at the configured row limit."""
    if not body.query:
        raise ClientInputError("Query parameter is required")

    settings = request.app.state.settings
    validation = validate_read_only_sql(body.query, max_length=settings.max_sql_query_length)
    if not validation.valid:
        raise SqlValidationError(validation.error or "Invalid query")

    db_backend = request.app.state.db_backend
    if db_backend is None:
        raise DatabaseUnavailableError("Database connection unavailable")

    result = await db_backend.execute_query(body.query)
    return ExecuteQueryResponse(
        results=result.results, count=result.count, truncated=result.truncated
    )


@router.get("/schema", response_model=SchemaResponse, responses=_ERRORS)
async def get_schema(request: Request) -> SchemaResponse:
    """Introspect the live database: table names and their CREATE statements."""
    db_backend = request.app.state.db_backend
    if db_backend is None:
        raise DatabaseUnavailableError("Database connection unavailable")
    return SchemaResponse(schema_=await db_backend.get_schema())
