"""Tests for building the FFmpeg command and spawning it."""

import subprocess
from pathlib import Path

import pytest

from pipe_encoder.domain.codec import resolve_codec
from pipe_encoder.domain.exceptions import (
    BinaryUnavailableException,
    InvalidGeometryException,
    PipeUnavailableException,
    SpawnFailedException,
)
from pipe_encoder.services import process_launcher
from pipe_encoder.services.process_launcher import build_ffmpeg_command, launch_session
from tests.conftest import FAKE_FFMPEG, FakeProcess


def test_build_command_h264_exact_order():
    cmd = build_ffmpeg_command("ffmpeg", "out.mp4", 64, 48, 30, resolve_codec("h264"))
    assert cmd == [
        "ffmpeg", "-y",
        "-f", "rawvideo", "-vcodec", "rawvideo", "-pix_fmt", "rgba",
        "-s", "64x48", "-r", "30", "-i", "pipe:0",
        "-c:v", "libx264", "-preset", "slow", "-crf", "18", "-pix_fmt", "yuv420p",
        "-movflags", "+faststart",
        "out.mp4",
    ]


@pytest.mark.parametrize("codec", ["prores", "ffv1"])
def test_build_command_places_profile_before_faststart(codec):
    profile = resolve_codec(codec)
    cmd = build_ffmpeg_command("ffmpeg", Path("clip.mov"), 32, 32, 24, profile)
    input_end = cmd.index("pipe:0") + 1
    assert tuple(cmd[input_end:input_end + len(profile.args)]) == profile.args
    assert cmd[-3:] == ["-movflags", "+faststart", "clip.mov"]
    assert "-y" in cmd


def test_launch_session_spawns_with_pipe_and_discarded_output(fake_popen, spawned, tmp_path):
    output = tmp_path / "out.mp4"
    session = launch_session(output, 64, 64, 30, "prores")

    assert len(spawned) == 1
    process = spawned[0]
    assert process.args[0] == FAKE_FFMPEG
    assert process.stdin_arg == subprocess.PIPE
    assert process.stdout_arg == subprocess.DEVNULL
    assert process.stderr_arg == subprocess.DEVNULL

    assert session.process is process
    assert session.pipe is process.stdin
    assert (session.width, session.height, session.fps) == (64, 64, 30)
    assert session.frame_size == 64 * 64 * 4
    assert session.codec.name == "prores"
    assert session.output_path == output
    assert session.command == process.args
    assert session.frames_written == 0


def test_launch_session_unknown_codec_uses_h264(fake_popen, spawned):
    session = launch_session("out.mp4", 16, 16, 30, "unknownvalue")
    assert session.codec.name == "h264"
    assert "libx264" in spawned[0].args


def test_launch_session_uses_explicit_binary(fake_popen, spawned, monkeypatch):
    def fail():
        raise AssertionError("resolve_ffmpeg must not be called")

    monkeypatch.setattr(process_launcher, "resolve_ffmpeg", fail)
    launch_session("out.mp4", 16, 16, 30, "h264", ffmpeg_path="/custom/ffmpeg")
    assert spawned[0].args[0] == "/custom/ffmpeg"


@pytest.mark.parametrize(
    "width,height,fps",
    [(0, 64, 30), (64, 0, 30), (64, 64, 0), (-1, 64, 30), (64, 64, 29.97), (True, 64, 30)],
)
def test_launch_session_rejects_bad_geometry(fake_popen, spawned, width, height, fps):
    with pytest.raises(InvalidGeometryException):
        launch_session("out.mp4", width, height, fps, "h264")
    assert spawned == []


def test_launch_session_binary_unavailable(fake_popen, spawned, monkeypatch):
    def missing():
        raise BinaryUnavailableException("FFmpeg binary not found")

    monkeypatch.setattr(process_launcher, "resolve_ffmpeg", missing)
    with pytest.raises(BinaryUnavailableException):
        launch_session("out.mp4", 16, 16, 30, "h264")
    assert spawned == []


def test_launch_session_spawn_failed(monkeypatch):
    def refuse(args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(subprocess, "Popen", refuse)
    with pytest.raises(SpawnFailedException, match="Failed to spawn FFmpeg"):
        launch_session("out.mp4", 16, 16, 30, "h264", ffmpeg_path="/bin/ffmpeg")


def test_launch_session_pipe_unavailable_reaps_process(monkeypatch):
    created = []

    def no_stdin(args, **kwargs):
        process = FakeProcess(args)
        created.append(process)
        return process

    monkeypatch.setattr(subprocess, "Popen", no_stdin)
    with pytest.raises(PipeUnavailableException, match="Failed to get FFmpeg stdin"):
        launch_session("out.mp4", 16, 16, 30, "h264", ffmpeg_path="/bin/ffmpeg")
    assert created[0].killed
    assert created[0].wait_calls == 1


class _IntLike:
    """An integer-like scalar, as returned by array libraries."""

    def __init__(self, value):
        self.value = value

    def __index__(self):
        return self.value


def test_launch_session_accepts_integer_like_geometry(fake_popen, spawned):
    session = launch_session("out.mp4", _IntLike(64), _IntLike(32), _IntLike(30), "h264")

    assert session.width == 64 and session.height == 32 and session.fps == 30
    assert session.frame_size == 64 * 32 * 4
    args = spawned[0].args
    assert args[args.index("-s") + 1] == "64x32"
    assert args[args.index("-r") + 1] == "30"


def test_launch_session_rejects_non_positive_integer_like(fake_popen, spawned):
    with pytest.raises(InvalidGeometryException):
        launch_session("out.mp4", _IntLike(0), 64, 30, "h264")
    assert spawned == []
