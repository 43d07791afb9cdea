"""Process launcher: runs the data service and the front door side by side."""

from __future__ import annotations

import multiprocessing
import os
import signal
from collections.abc import Callable
from types import FrameType

import structlog
import uvicorn

from sql_chatbot.config import get_settings
from sql_chatbot.logging import setup_logging

logger = structlog.get_logger()


def run_data_service() -> None:
    settings = get_settings()
    uvicorn.run(
        "sql_chatbot.app:create_data_app",
        factory=True,
        host=settings.data_service_host,
        port=settings.data_service_port,
        log_level=settings.log_level.lower(),
    )


def run_chatbot() -> None:
    settings = get_settings()
    uvicorn.run(
        "sql_chatbot.app:create_chatbot_app",
        factory=True,
        host=settings.chatbot_host,
        port=settings.chatbot_port,
        log_level=settings.log_level.lower(),
    )


def _detached(target: Callable[[], None]) -> None:
    # Own process group: terminal signals reach only the launcher, which forwards them once
    os.setpgrp()
    target()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, service="launcher")

    processes = [
        multiprocessing.Process(target=_detached, args=(run_data_service,), name="data-service"),
        multiprocessing.Process(target=_detached, args=(run_chatbot,), name="chatbot"),
    ]
    for process in processes:
        process.start()

    logger.info(
        "services_started",
        data_service=f"http://localhost:{settings.data_service_port}",
        chatbot=f"http://localhost:{settings.chatbot_port}",
    )

    def forward(signum: int, frame: FrameType | None) -> None:
        logger.info("services_stopping", signal=signal.Signals(signum).name)
        for process in processes:
            if process.is_alive() and process.pid is not None:
                os.kill(process.pid, signum)

    signal.signal(signal.SIGINT, forward)
    signal.signal(signal.SIGTERM, forward)

    for process in processes:
        process.join()

    logger.info("services_stopped")
