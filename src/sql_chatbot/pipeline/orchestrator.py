from __future__ import annotations

import time

import structlog

from sql_chatbot.db.remote import DataServiceClient
from sql_chatbot.errors import QueryProcessingError, ServiceError
from sql_chatbot.llm.client import CompletionClient
from sql_chatbot.llm.prompts import build_analysis_prompt, build_conversation_prompt
from sql_chatbot.llm.sql_generator import SQLGenerator
from sql_chatbot.models.responses import QueryResponse
from sql_chatbot.observability.metrics import ChatbotMetrics
from sql_chatbot.pipeline.classifier import needs_data

logger = structlog.get_logger()


class QueryOrchestrator:
    """Coordinates question -> SQL -> data service -> phrased answer."""

    def __init__(
        self,
        completion_client: CompletionClient,
        data_client: DataServiceClient,
        sql_generator: SQLGenerator | None = None,
        metrics: ChatbotMetrics | None = None,
    ) -> None:
        self._llm = completion_client
        self._data_client = data_client
        self._generator = sql_generator or SQLGenerator(completion_client)
        self._metrics = metrics or ChatbotMetrics()

    @property
    def metrics(self) -> ChatbotMetrics:
        return self._metrics

    async def handle(self, question: str) -> QueryResponse:
        """Answer a question, querying the data service when it asks for data.

        Any downstream failure is raised as QueryProcessingError with the
        underlying message attached.
        """
        start = time.monotonic()
        await self._metrics.increment("queries_total")
        try:
            if needs_data(question):
                response = await self._answer_from_data(question, start)
            else:
                response = await self._answer_conversationally(question, start)
        except ServiceError as e:
            await self._metrics.increment("queries_failed")
            logger.error("query_processing_failed", question=question, error=str(e))
            raise QueryProcessingError(details=str(e)) from e

        logger.info(
            "question_answered",
            question=question,
            sql=response.sql_query,
            results_count=response.results_count,
            response_time=response.response_time,
        )
        return response

    async def _answer_from_data(self, question: str, start: float) -> QueryResponse:
        await self._metrics.increment("queries_data")
        generated = await self._generator.generate(question)
        await self._metrics.record_sql_source(generated.source)

        result = await self._data_client.execute_query(generated.sql)
        answer = await self._llm.complete(build_analysis_prompt(question, result.results))

        return QueryResponse(
            response=answer,
            sql_query=generated.sql,
            response_time=_elapsed(start),
            results_count=len(result.results),
        )

    async def _answer_conversationally(self, question: str, start: float) -> QueryResponse:
        await self._metrics.increment("queries_conversational")
        answer = await self._llm.complete(build_conversation_prompt(question))
        return QueryResponse(
            response=answer,
            sql_query=None,
            response_time=_elapsed(start),
            results_count=0,
        )


def _elapsed(start: float) -> str:
    return f"{round((time.monotonic() - start) * 1000)}ms"
