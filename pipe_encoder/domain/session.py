"""
Defines the live state of a single recording and the report left behind once
the recording is finalized.
"""

import subprocess
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import IO, List

from ..config.video import BYTES_PER_PIXEL
from .codec import CodecProfile


class EncodeSession:
    """
    The state of one active FFmpeg recording.

    An `EncodeSession` is created by the process launcher once FFmpeg is running,
    owned by the session store while frames are sent, and consumed by the
    shutdown service. The process and pipe handles never leave it.

    Lifecycle:
    1. `launch_session()` spawns FFmpeg and wraps the process and its stdin here.
    2. `write_frame()` validates each frame against `frame_size` and writes it to
       `pipe`, bumping `frames_written` and `bytes_written`.
    3. `finalize_session()` closes `pipe`, waits for `process` and turns the
       bookkeeping into a `RecordingSummary`.

    Attributes:
        process (subprocess.Popen): The running FFmpeg process.
        pipe (IO[bytes]): FFmpeg's standard input.
        width (int): Frame width in pixels. Fixed for the life of the session.
        height (int): Frame height in pixels. Fixed for the life of the session.
        fps (int): The frame rate declared to FFmpeg.
        output_path (Path): The destination file FFmpeg writes.
        codec (CodecProfile): The profile the session was started with.
        command (List[str]): The exact argument vector FFmpeg was launched with.
        started_at (datetime): When FFmpeg was spawned.
        frames_written (int): Frames fully written to the pipe.
        bytes_written (int): Bytes fully written to the pipe.
    """

    def __init__(
        self,
        process: subprocess.Popen,
        pipe: IO[bytes],
        width: int,
        height: int,
        fps: int,
        output_path: Path,
        codec: CodecProfile,
        command: List[str],
    ):
        self.process = process
        self.pipe = pipe
        self._width = width
        self._height = height
        self.fps = fps
        self.output_path = output_path
        self.codec = codec
        self.command = command
        self.started_at = datetime.now()
        self.frames_written = 0
        self.bytes_written = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def frame_size(self) -> int:
        """The exact byte length every frame must have."""
        return self._width * self._height * BYTES_PER_PIXEL

    @property
    def pid(self) -> int:
        return self.process.pid

    def __repr__(self) -> str:
        return (
            f"EncodeSession(pid={self.process.pid}, {self._width}x{self._height}@{self.fps}, "
            f"codec={self.codec.name}, output='{self.output_path}', frames={self.frames_written})"
        )


@dataclass(frozen=True)
class RecordingSummary:
    """What a finished recording wrote, reported by a successful `stop`."""

    output_path: Path
    codec: str
    width: int
    height: int
    fps: int
    frames_written: int
    bytes_written: int
    elapsed: timedelta
