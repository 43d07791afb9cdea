from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sql_chatbot.errors import ClientInputError


class UserQueryRequest(BaseModel):
    """Front-door request body.

    The field is typed loosely so that type and length problems surface as
    400 responses with a readable message instead of pydantic's 422.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_query: Any = Field(default=None, alias="userQuery")

    def text(self, max_length: int) -> str:
        if not self.user_query or not isinstance(self.user_query, str):
            raise ClientInputError("Query is required and must be a string")
        if len(self.user_query) > max_length:
            raise ClientInputError(
                f"Query too long. Maximum {max_length} characters allowed."
            )
        return self.user_query


class ExecuteQueryRequest(BaseModel):
    query: Any = None
