from __future__ import annotations

import pytest
from pydantic import ValidationError

from sql_chatbot.errors import ClientInputError
from sql_chatbot.models.domain import GeneratedSQL, SchemaEntry, SqlSource, ValidationResult
from sql_chatbot.models.requests import UserQueryRequest
from sql_chatbot.models.responses import QueryResponse, SchemaResponse


def test_query_response_serializes_camel_case() -> None:
    response = QueryResponse(
        response="Hi", sql_query="SELECT * FROM sales", response_time="12ms", results_count=3
    )
    assert response.model_dump(by_alias=True) == {
        "response": "Hi",
        "sqlQuery": "SELECT * FROM sales",
        "responseTime": "12ms",
        "resultsCount": 3,
    }


def test_schema_response_uses_schema_key() -> None:
    response = SchemaResponse(schema_=[SchemaEntry(name="sales", sql="CREATE TABLE sales (id)")])
    data = response.model_dump(by_alias=True, mode="json")
    assert data["schema"] == [{"name": "sales", "sql": "CREATE TABLE sales (id)"}]
    assert "timestamp" in data


def test_generated_sql_is_frozen() -> None:
    generated = GeneratedSQL(sql="SELECT 1", source=SqlSource.AI)
    with pytest.raises(ValidationError):
        generated.sql = "SELECT 2"  # type: ignore[misc]


def test_validation_result_constructors() -> None:
    assert ValidationResult.ok() == ValidationResult(valid=True, error=None)
    assert ValidationResult.reject("nope").error == "nope"


def test_user_query_accepts_alias() -> None:
    body = UserQueryRequest.model_validate({"userQuery": "hello"})
    assert body.text(max_length=500) == "hello"


def test_user_query_too_long() -> None:
    body = UserQueryRequest.model_validate({"userQuery": "x" * 11})
    with pytest.raises(ClientInputError, match="Maximum 10 characters"):
        body.text(max_length=10)
