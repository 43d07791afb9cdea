"""Rule-based SQL used when the model is unavailable or produces unusable SQL."""

from __future__ import annotations

DEFAULT_FALLBACK_SQL = "SELECT * FROM sales LIMIT 10"

# First matching rule wins.
FALLBACK_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("highest", "max"), "SELECT * FROM sales ORDER BY sales_amount DESC LIMIT 1"),
    (("total", "sum", "revenue"), "SELECT SUM(sales_amount) as total FROM sales"),
    (("all", "show", "list"), "SELECT * FROM sales"),
)


def fallback_sql(user_query: str) -> str:
    query = user_query.lower()
    for keywords, sql in FALLBACK_RULES:
        if any(keyword in query for keyword in keywords):
            return sql
    return DEFAULT_FALLBACK_SQL
