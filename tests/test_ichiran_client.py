import asyncio
import logging
import time

import pytest

from app.clients.ichiran_client import IchiranClient
from app.core.errors import EngineTimeoutError, ProcessError


def run(coro):
    return asyncio.run(coro)


def test_line_mode_arguments(fake_engine):
    client = IchiranClient(fake_engine('printf "%s\\n" "$@"'))
    assert run(client.romanize("今日は")) == "-i\n今日は\n"


def test_full_mode_arguments(fake_engine):
    client = IchiranClient(fake_engine('printf "%s\\n" "$@"'))
    assert run(client.romanize_full("今日は", limit=3)) == "-f\n-l\n3\n今日は\n"


def test_stderr_is_logged_not_fatal(fake_engine, caplog):
    client = IchiranClient(fake_engine('echo "style warning" >&2\necho ok'))
    with caplog.at_level(logging.WARNING):
        assert run(client.run(["-i", "x"])) == "ok\n"
    assert "style warning" in caplog.text


def test_nonzero_exit_raises_process_error(fake_engine):
    client = IchiranClient(fake_engine('echo "no such word" >&2\nexit 3'))
    with pytest.raises(ProcessError) as exc:
        run(client.romanize("x"))
    assert "exit code 3" in str(exc.value)
    assert "no such word" in str(exc.value)


def test_missing_executable_raises_process_error(tmp_path):
    client = IchiranClient(str(tmp_path / "does-not-exist"))
    with pytest.raises(ProcessError):
        run(client.romanize("x"))


def test_timeout_kills_process(fake_engine):
    client = IchiranClient(fake_engine("exec sleep 10"), timeout_seconds=0.5)
    start = time.monotonic()
    with pytest.raises(EngineTimeoutError):
        run(client.romanize("x"))
    assert time.monotonic() - start < 5


def test_output_ceiling(fake_engine):
    client = IchiranClient(fake_engine("head -c 4096 /dev/zero"), max_output_bytes=1024)
    with pytest.raises(ProcessError) as exc:
        run(client.romanize("x"))
    assert "exceeded 1024 bytes" in str(exc.value)


def test_timeout_kills_forked_children(fake_engine):
    # sh forks sleep here instead of exec'ing it, so sleep holds the pipes
    client = IchiranClient(fake_engine("sleep 6"), timeout_seconds=0.5)
    start = time.monotonic()
    with pytest.raises(EngineTimeoutError):
        run(client.romanize("x"))
    assert time.monotonic() - start < 3
