from __future__ import annotations

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from sql_chatbot.sql.validators import validate_read_only_sql


def create_mcp_server() -> FastMCP:
    """Create the MCP server exposing the data service's read-only tools."""
    mcp = FastMCP("Sales Data Tools")

    def _backend():
        db_backend = getattr(mcp.state, "db_backend", None)
        if db_backend is None:
            raise ToolError("Database connection unavailable")
        return db_backend

    @mcp.tool()
    async def execute_query(query: str) -> dict:
        """Execute a read-only SELECT against the sales database.

        Results are capped at the configured row limit; ``truncated`` reports
        whether the cap was reached.

        Args:
            query: A single SELECT statement.
        """
        settings = mcp.state.settings
        validation = validate_read_only_sql(query, max_length=settings.max_sql_query_length)
        if not validation.valid:
            raise ToolError(validation.error or "Invalid query")
        result = await _backend().execute_query(query)
        return result.model_dump()

    @mcp.tool()
    async def get_schema() -> dict:
        """List the tables in the live database with their CREATE statements."""
        entries = await _backend().get_schema()
        return {"schema": [entry.model_dump() for entry in entries]}

    return mcp
