from __future__ import annotations

import logging
import subprocess
from unittest.mock import MagicMock, patch

from uiprobe.config import EngineOptions
from uiprobe.waiter import Waiter


def _waiter(**options) -> Waiter:
    return Waiter(views=MagicMock(), searcher=MagicMock(), options=EngineOptions(**options))


def test_clear_log_runs_configured_command() -> None:
    waiter = _waiter(log_clear_command=["adb", "logcat", "-c"], log_clear_timeout_s=2.0)
    done = subprocess.CompletedProcess(args=[], returncode=0)

    with patch("uiprobe.waiter.subprocess.run", return_value=done) as run:
        assert waiter.clear_log() is True

    run.assert_called_once_with(["adb", "logcat", "-c"], capture_output=True, timeout=2.0)


def test_clear_log_swallows_missing_command(caplog) -> None:
    waiter = _waiter()

    with patch("uiprobe.waiter.subprocess.run", side_effect=FileNotFoundError("logcat")):
        with caplog.at_level(logging.WARNING, logger="uiprobe.waiter"):
            assert waiter.clear_log() is False

    assert "Could not clear log" in caplog.text


def test_clear_log_swallows_timeout(caplog) -> None:
    waiter = _waiter()
    err = subprocess.TimeoutExpired(cmd=["logcat", "-c"], timeout=5.0)

    with patch("uiprobe.waiter.subprocess.run", side_effect=err):
        with caplog.at_level(logging.WARNING, logger="uiprobe.waiter"):
            assert waiter.clear_log() is False

    assert caplog.records


def test_clear_log_reports_nonzero_exit(caplog) -> None:
    waiter = _waiter()
    failed = subprocess.CompletedProcess(args=[], returncode=1)

    with patch("uiprobe.waiter.subprocess.run", return_value=failed):
        with caplog.at_level(logging.WARNING, logger="uiprobe.waiter"):
            assert waiter.clear_log() is False

    assert "exited with status 1" in caplog.text
