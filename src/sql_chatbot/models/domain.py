from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SqlSource(str, Enum):
    AI = "ai"
    FALLBACK = "fallback"


class GeneratedSQL(BaseModel):
    model_config = ConfigDict(frozen=True)

    sql: str
    source: SqlSource


class ValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def reject(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)


class QueryResult(BaseModel):
    results: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    truncated: bool = False


class SchemaEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    sql: str | None = None
