from __future__ import annotations

import httpx
import structlog
from pydantic import ValidationError

from sql_chatbot.config import Settings
from sql_chatbot.errors import DataServiceError
from sql_chatbot.models.domain import QueryResult
from sql_chatbot.models.responses import ExecuteQueryResponse

logger = structlog.get_logger()


class DataServiceClient:
    """HTTP client the front door uses to run SQL on the data service."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout_seconds, transport=transport
        )

    async def execute_query(self, sql: str) -> QueryResult:
        try:
            response = await self._client.post("/mcp/executeQuery", json={"query": sql})
        except httpx.TimeoutException as e:
            logger.error("data_service_request_failed", reason="timeout", error=str(e))
            raise DataServiceError("Data service request timed out", details=str(e)) from e
        except httpx.HTTPError as e:
            logger.error("data_service_request_failed", reason="transport", error=str(e))
            raise DataServiceError("Data service unreachable", details=str(e)) from e

        if response.is_error:
            error = _error_text(response)
            logger.warning(
                "data_service_request_failed",
                reason="status",
                status_code=response.status_code,
                error=error,
            )
            raise DataServiceError(
                f"Data service returned HTTP {response.status_code}", details=error
            )

        try:
            body = ExecuteQueryResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DataServiceError("Malformed data service response", details=str(e)) from e

        return QueryResult(results=body.results, count=body.count, truncated=body.truncated)

    async def aclose(self) -> None:
        await self._client.aclose()


def _error_text(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return response.text[:500] or None
    if not isinstance(body, dict):
        return None
    parts = [str(body[key]) for key in ("error", "details") if body.get(key)]
    return ": ".join(parts) or None


def create_data_service_client(settings: Settings) -> DataServiceClient:
    return DataServiceClient(
        base_url=settings.data_service_url,
        timeout_seconds=settings.data_service_timeout_seconds,
    )
