from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sql_chatbot.models.domain import SchemaEntry, utcnow


class QueryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    response: str
    sql_query: str | None = Field(default=None, alias="sqlQuery")
    response_time: str = Field(alias="responseTime")
    results_count: int = Field(default=0, alias="resultsCount")


class ExecuteQueryResponse(BaseModel):
    results: list[dict[str, Any]]
    count: int
    truncated: bool


class SchemaResponse(BaseModel):
    schema_: list[SchemaEntry] = Field(alias="schema")
    timestamp: datetime = Field(default_factory=utcnow)

    model_config = ConfigDict(populate_by_name=True)


class ChatbotHealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: datetime = Field(default_factory=utcnow)
    metrics: dict[str, int | float] = Field(default_factory=dict)


class DataHealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: datetime = Field(default_factory=utcnow)
    database: str = "connected"


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
