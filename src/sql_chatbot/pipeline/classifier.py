"""Decides whether a question needs a database lookup or a plain reply."""

from __future__ import annotations

# Not the same set as the fallback rules in sql_chatbot.sql.fallback.
DATA_KEYWORDS: frozenset[str] = frozenset(
    {
        "highest", "max", "total", "sum", "revenue", "sales",
        "find", "show", "get", "data", "all",
    }
)


def needs_data(question: str) -> bool:
    text = question.lower()
    return any(keyword in text for keyword in DATA_KEYWORDS)
