from __future__ import annotations

from pydantic import ConfigDict, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Completion service (Ollama)
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "phi3:mini"
    llm_max_tokens: int = 100
    llm_temperature: float = 0.1
    llm_timeout_seconds: float = 60.0
    llm_retry_attempts: int = 1
    llm_retry_min_wait_seconds: int = 1
    llm_retry_max_wait_seconds: int = 5

    # Data service
    data_service_url: str = "http://localhost:3001"
    data_service_timeout_seconds: float = 10.0
    sqlite_url: str = "sqlite+aiosqlite:///./database/sales.db"
    max_result_rows: int = 1000

    # Input limits
    max_user_query_length: int = 500
    max_sql_query_length: int = 10000

    # App
    chatbot_host: str = "0.0.0.0"
    chatbot_port: int = 3000
    data_service_host: str = "0.0.0.0"
    data_service_port: int = 3001
    log_level: str = "INFO"

    @field_validator("ollama_base_url", "data_service_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v


def get_settings() -> Settings:
    return Settings()
