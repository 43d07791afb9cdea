from __future__ import annotations

import json

import httpx
import pytest

from sql_chatbot.db.remote import DataServiceClient
from sql_chatbot.errors import DataServiceError


def _client(handler) -> DataServiceClient:
    return DataServiceClient("http://data.test", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_execute_query_posts_sql() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200, json={"results": [{"total": 10}], "count": 1, "truncated": False}
        )

    client = _client(handler)
    try:
        result = await client.execute_query("SELECT SUM(sales_amount) as total FROM sales")
    finally:
        await client.aclose()

    assert seen[0].url.path == "/mcp/executeQuery"
    assert json.loads(seen[0].content) == {"query": "SELECT SUM(sales_amount) as total FROM sales"}
    assert result.results == [{"total": 10}]
    assert result.count == 1


@pytest.mark.asyncio
async def test_error_status_carries_service_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "Query contains forbidden keyword: DROP"})

    client = _client(handler)
    try:
        with pytest.raises(DataServiceError) as exc_info:
            await client.execute_query("DROP TABLE sales")
    finally:
        await client.aclose()
    assert "HTTP 400" in exc_info.value.message
    assert exc_info.value.details == "Query contains forbidden keyword: DROP"


@pytest.mark.asyncio
async def test_timeout_raises_data_service_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(handler)
    try:
        with pytest.raises(DataServiceError, match="timed out"):
            await client.execute_query("SELECT 1")
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_unreachable_raises_data_service_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    try:
        with pytest.raises(DataServiceError, match="unreachable"):
            await client.execute_query("SELECT 1")
    finally:
        await client.aclose()


@pytest.mark.asyncio
async def test_malformed_body_raises_data_service_error() -> None:
    client = _client(lambda request: httpx.Response(200, json={"rows": []}))
    try:
        with pytest.raises(DataServiceError, match="Malformed"):
            await client.execute_query("SELECT 1")
    finally:
        await client.aclose()
