"""Keyword-level SQL validation shared by the front door and the data service.

These checks are case-insensitive substring tests, not a SQL parser.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from sql_chatbot.models.domain import ValidationResult


class ValidationRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_length: int | None = None
    forbidden_keywords: tuple[str, ...] = ()
    # Anchored: trimmed text must start with SELECT. Otherwise it only has to contain it.
    select_anchored: bool = False
    # (bare, qualified) pairs: bare is rejected unless qualified also appears.
    column_qualifications: tuple[tuple[str, str], ...] = ()
    required_table: str | None = None
    empty_message: str = "SQL query must be a non-empty string"


FRONT_DOOR_RULES = ValidationRules(
    column_qualifications=(("AMOUNT", "SALES_AMOUNT"),),
    required_table="SALES",
)

DATA_SERVICE_RULES = ValidationRules(
    max_length=10000,
    forbidden_keywords=(
        "DROP", "DELETE", "UPDATE", "INSERT", "CREATE", "ALTER", "TRUNCATE",
        "ATTACH", "DETACH", "VACUUM", "PRAGMA",
    ),
    select_anchored=True,
    empty_message="Query must be a non-empty string",
)


class SqlValidator:
    """Validates SQL text against a fixed rule set."""

    def __init__(self, rules: ValidationRules) -> None:
        self._rules = rules

    @property
    def rules(self) -> ValidationRules:
        return self._rules

    def validate(self, sql: Any) -> ValidationResult:
        rules = self._rules
        if not sql or not isinstance(sql, str):
            return ValidationResult.reject(rules.empty_message)

        if rules.max_length is not None and len(sql) > rules.max_length:
            return ValidationResult.reject(
                f"Query too long. Maximum {rules.max_length} characters allowed."
            )

        upper = sql.upper().strip()

        for keyword in rules.forbidden_keywords:
            if keyword in upper:
                return ValidationResult.reject(f"Query contains forbidden keyword: {keyword}")

        if rules.select_anchored:
            if not upper.startswith("SELECT"):
                return ValidationResult.reject("Only SELECT queries are allowed")
        elif "SELECT" not in upper:
            return ValidationResult.reject("Query must be a SELECT statement")

        for bare, qualified in rules.column_qualifications:
            if bare in upper and qualified not in upper:
                return ValidationResult.reject(
                    f'Column name "{bare}" should be "{qualified}"'
                )

        if rules.required_table and f"FROM {rules.required_table}" not in upper:
            return ValidationResult.reject(
                f'Query must select from the "{rules.required_table.lower()}" table'
            )

        return ValidationResult.ok()


def validate_generated_sql(sql: str) -> ValidationResult:
    """Front-door check applied to model output before it leaves the chatbot."""
    return SqlValidator(FRONT_DOOR_RULES).validate(sql)


def validate_read_only_sql(sql: str, max_length: int | None = None) -> ValidationResult:
    """Data-service check applied before anything reaches the database."""
    rules = DATA_SERVICE_RULES
    if max_length is not None and max_length != rules.max_length:
        rules = rules.model_copy(update={"max_length": max_length})
    return SqlValidator(rules).validate(sql)
