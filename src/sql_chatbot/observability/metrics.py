from __future__ import annotations

import asyncio
import time
from collections import defaultdict

from sql_chatbot.models.domain import SqlSource


class ChatbotMetrics:
    """In-memory request counters for the front door, reported by /health."""

    def __init__(self) -> None:
        self._counters: dict[str, int] = defaultdict(int)
        self._lock = asyncio.Lock()
        self._start_time = time.monotonic()

    async def increment(self, name: str, amount: int = 1) -> None:
        async with self._lock:
            self._counters[name] += amount

    async def record_sql_source(self, source: SqlSource) -> None:
        await self.increment(f"sql_source_{source.value}")

    async def get_stats(self) -> dict[str, int | float]:
        async with self._lock:
            stats: dict[str, int | float] = dict(self._counters)
        stats["uptime_seconds"] = round(time.monotonic() - self._start_time, 1)
        return stats
