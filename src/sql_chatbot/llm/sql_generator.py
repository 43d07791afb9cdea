from __future__ import annotations

import re

import structlog

from sql_chatbot.errors import CompletionError
from sql_chatbot.llm.client import CompletionClient
from sql_chatbot.llm.prompts import build_sql_generation_prompt
from sql_chatbot.models.domain import GeneratedSQL, SqlSource
from sql_chatbot.sql.fallback import fallback_sql
from sql_chatbot.sql.validators import FRONT_DOOR_RULES, SqlValidator

logger = structlog.get_logger()

_OPENING_FENCE_RE = re.compile(r"^\s*```(?:sql)?\s*", re.IGNORECASE)
_CLOSING_FENCE_RE = re.compile(r"\s*```\s*$")


class SQLGenerator:
    """Generates SQL from natural language, falling back to canned queries."""

    def __init__(
        self,
        client: CompletionClient,
        validator: SqlValidator | None = None,
    ) -> None:
        self._client = client
        self._validator = validator or SqlValidator(FRONT_DOOR_RULES)

    async def generate(self, question: str) -> GeneratedSQL:
        prompt = build_sql_generation_prompt(question)
        try:
            raw = await self._client.complete(prompt)
        except CompletionError as e:
            logger.warning("sql_generation_failed", question=question, error=str(e))
            return self._fallback(question)

        sql = self._strip_code_fences(raw)
        validation = self._validator.validate(sql)
        if not validation.valid:
            logger.info(
                "sql_generation_rejected",
                question=question,
                sql=sql,
                reason=validation.error,
            )
            return self._fallback(question)

        logger.info("sql_generated", question=question, sql=sql, source=SqlSource.AI.value)
        return GeneratedSQL(sql=sql, source=SqlSource.AI)

    @staticmethod
    def _fallback(question: str) -> GeneratedSQL:
        sql = fallback_sql(question)
        logger.info("sql_generated", question=question, sql=sql, source=SqlSource.FALLBACK.value)
        return GeneratedSQL(sql=sql, source=SqlSource.FALLBACK)

    @staticmethod
    def _strip_code_fences(text: str) -> str:
        """Remove markdown code fences if present."""
        text = _OPENING_FENCE_RE.sub("", text)
        text = _CLOSING_FENCE_RE.sub("", text)
        return text.strip()
