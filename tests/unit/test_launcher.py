from __future__ import annotations

import signal
from unittest.mock import MagicMock, patch

from sql_chatbot import launcher


def test_run_chatbot_uses_app_factory() -> None:
    with patch("sql_chatbot.launcher.uvicorn.run") as run:
        launcher.run_chatbot()
    args, kwargs = run.call_args
    assert args == ("sql_chatbot.app:create_chatbot_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 3000


def test_run_data_service_uses_app_factory() -> None:
    with patch("sql_chatbot.launcher.uvicorn.run") as run:
        launcher.run_data_service()
    args, kwargs = run.call_args
    assert args == ("sql_chatbot.app:create_data_app",)
    assert kwargs["port"] == 3001


def test_main_starts_both_services_and_forwards_signals() -> None:
    handlers: dict[int, object] = {}
    processes: list[MagicMock] = []

    def make_process(*args, **kwargs) -> MagicMock:
        process = MagicMock(pid=1000 + len(processes))
        process.is_alive.return_value = True
        processes.append(process)
        return process

    with (
        patch("sql_chatbot.launcher.multiprocessing.Process", side_effect=make_process) as process_cls,
        patch("sql_chatbot.launcher.signal.signal", side_effect=lambda s, h: handlers.__setitem__(s, h)),
        patch("sql_chatbot.launcher.os.kill") as kill,
    ):
        launcher.main()
        handlers[signal.SIGINT](signal.SIGINT, None)

    names = [call.kwargs["name"] for call in process_cls.call_args_list]
    assert names == ["data-service", "chatbot"]
    for process in processes:
        process.start.assert_called_once()
        process.join.assert_called_once()
    assert {call.args for call in kill.call_args_list} == {
        (1000, signal.SIGINT),
        (1001, signal.SIGINT),
    }
    assert signal.SIGTERM in handlers
