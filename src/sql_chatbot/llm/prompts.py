from __future__ import annotations

import json
from typing import Any

SALES_SCHEMA_DESCRIPTION = """\
- Table: sales
- Columns: id, product_name, sale_date, sales_amount"""

SQL_GENERATION_PROMPT = """\
Convert this natural language query to SQL for a sales database.

Database schema:
{schema}

User query: "{question}"

Generate a valid SELECT query that uses the correct column names.
Return only the SQL query, no explanations or markdown formatting.\
"""

ANALYSIS_PROMPT = """\
You are a helpful SQL assistant analyzing sales data. The user asked: "{question}"

Here is the sales data: {results}

Provide a natural, conversational response that:
1. Directly answers the user's question
2. Mentions specific data from the results
3. Uses a friendly, helpful tone
4. Keeps it concise (max 100 words)

Do NOT mention being an AI or your capabilities. Just answer the question naturally.\
"""

CONVERSATION_PROMPT = """\
You are a helpful SQL assistant. The user said: "{question}"

If this is a greeting, respond naturally and warmly.
If they're asking about your capabilities, explain you can help with sales data analysis.
If it's a general question, answer helpfully.

Keep your response friendly, natural, and conversational (max 100 words).
Do NOT mention being an AI or your technical capabilities unless specifically asked.\
"""


def build_sql_generation_prompt(question: str) -> str:
    return SQL_GENERATION_PROMPT.format(schema=SALES_SCHEMA_DESCRIPTION, question=question)


def build_analysis_prompt(question: str, results: list[dict[str, Any]]) -> str:
    return ANALYSIS_PROMPT.format(question=question, results=json.dumps(results, default=str))


def build_conversation_prompt(question: str) -> str:
    return CONVERSATION_PROMPT.format(question=question)
