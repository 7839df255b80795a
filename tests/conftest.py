"""
Pytest fixtures for the Pipe Encoder tests.

Unit tests never start FFmpeg: `subprocess.Popen` is replaced by `FakeProcess`,
whose stdin records everything written to it.
"""

import subprocess
from typing import List, Optional

import pytest
from loguru import logger

from pipe_encoder.services import process_launcher, session_store
from pipe_encoder.services.session_store import SessionStore

FAKE_FFMPEG = "/opt/ffmpeg/bin/ffmpeg"


class FakePipe:
    """A stdin stand-in that records writes.

    `max_chunk` caps how many bytes a single `write` accepts, to exercise the
    partial-write loop. `broken` makes writes (and a flush on close) raise
    BrokenPipeError, as when FFmpeg has exited.
    """

    def __init__(self, max_chunk: Optional[int] = None):
        self.max_chunk = max_chunk
        self.broken = False
        self.closed = False
        self.data = bytearray()
        self.write_calls = 0
        self.flush_calls = 0

    def write(self, chunk) -> int:
        self.write_calls += 1
        if self.closed:
            raise ValueError("write to closed file")
        if self.broken:
            raise BrokenPipeError(32, "Broken pipe")
        chunk = bytes(chunk)
        if self.max_chunk is not None:
            chunk = chunk[: self.max_chunk]
        self.data += chunk
        return len(chunk)

    def flush(self):
        self.flush_calls += 1
        if self.broken:
            raise BrokenPipeError(32, "Broken pipe")

    def close(self):
        was_broken = self.broken
        self.closed = True
        if was_broken:
            raise BrokenPipeError(32, "Broken pipe")


class FakeProcess:
    """A `subprocess.Popen` stand-in."""

    next_pid = 4000

    def __init__(self, args, stdin=None, stdout=None, stderr=None, **kwargs):
        FakeProcess.next_pid += 1
        self.pid = FakeProcess.next_pid
        self.args = list(args)
        self.stdin_arg = stdin
        self.stdout_arg = stdout
        self.stderr_arg = stderr
        self.stdin = FakePipe() if stdin == subprocess.PIPE else None
        self.returncode: Optional[int] = None
        self.exit_code = 0
        self.wait_error: Optional[OSError] = None
        self.killed = False
        self.wait_calls = 0

    def wait(self, timeout=None) -> int:
        self.wait_calls += 1
        if self.wait_error is not None:
            raise self.wait_error
        self.returncode = self.exit_code
        return self.returncode

    def kill(self):
        self.killed = True
        self.exit_code = -9


@pytest.fixture
def spawned() -> List[FakeProcess]:
    """Every FakeProcess created during the test, in spawn order."""
    return []


@pytest.fixture
def fake_popen(monkeypatch, spawned):
    """Replaces subprocess.Popen and FFmpeg resolution with fakes."""

    def factory(args, **kwargs):
        process = FakeProcess(args, **kwargs)
        spawned.append(process)
        return process

    monkeypatch.setattr(subprocess, "Popen", factory)
    monkeypatch.setattr(process_launcher, "resolve_ffmpeg", lambda: FAKE_FFMPEG)
    return factory


@pytest.fixture
def store(fake_popen) -> SessionStore:
    return SessionStore()


@pytest.fixture
def default_store(monkeypatch, fake_popen) -> SessionStore:
    """A fresh store behind the module-level start/send/stop functions."""
    fresh = SessionStore()
    monkeypatch.setattr(session_store, "default_store", fresh)
    return fresh


@pytest.fixture
def log_messages():
    """Collects loguru messages emitted during the test."""
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="TRACE")
    yield messages
    logger.remove(handler_id)
