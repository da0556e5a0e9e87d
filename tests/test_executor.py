import logging
import os
import subprocess

import pytest

from rselect import executor
from rselect.executor import run_command
from rselect.logging_setup import configure_logging


@pytest.fixture
def devnull_stdin(monkeypatch):
    with open(os.devnull) as f:
        monkeypatch.setattr("sys.stdin", f)
        yield f


def test_run_command_returns_exit_status(monkeypatch, devnull_stdin):
    monkeypatch.setenv("SHELL", "/bin/sh")
    assert run_command("exit 3") == 3


def test_run_command_missing_shell(monkeypatch, tmp_path, devnull_stdin):
    monkeypatch.setenv("SHELL", str(tmp_path / "no-shell"))
    assert run_command("true") == 127


def test_run_command_reads_current_stdin(monkeypatch, tmp_path):
    calls = []

    def fake_run(args, **kwargs):
        calls.append(kwargs)
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setenv("SHELL", "/bin/sh")
    monkeypatch.setattr(executor.subprocess, "run", fake_run)
    terminal = open(tmp_path / "tty", "w+")
    try:
        monkeypatch.setattr("sys.stdin", terminal)
        assert run_command("cat") == 0
        assert calls[0]["stdin"] is terminal
    finally:
        terminal.close()


def test_run_command_sees_replaced_stdin(monkeypatch, tmp_path):
    (tmp_path / "input").write_text("from terminal\n")
    monkeypatch.setenv("SHELL", "/bin/sh")
    out = tmp_path / "out"
    with open(tmp_path / "input") as f:
        monkeypatch.setattr("sys.stdin", f)
        assert run_command(f"cat > {out}") == 0
    assert out.read_text() == "from terminal\n"


def test_debug_logging_writes_file(tmp_path):
    log_path = tmp_path / "logs" / "debug.log"
    logger = logging.getLogger("rich_select")
    before = list(logger.handlers)
    try:
        configure_logging(True, log_path)
        logging.getLogger("rich_select.engine").debug("hello from engine")
        for handler in logger.handlers:
            handler.flush()
        assert "hello from engine" in log_path.read_text()
    finally:
        for name in ("rich_select", "rselect"):
            log = logging.getLogger(name)
            for handler in list(log.handlers):
                if handler not in before:
                    log.removeHandler(handler)
                    handler.close()


def test_logging_off_creates_nothing(tmp_path):
    configure_logging(False, tmp_path / "debug.log")
    assert not (tmp_path / "debug.log").exists()
