"""
This module starts FFmpeg for a new recording. It turns a declarative request
(output path, geometry, frame rate, codec selector) into a running FFmpeg process
that reads raw RGBA frames from its standard input.
"""

import operator
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple, Union

from loguru import logger

from ..config.video import FASTSTART_FLAGS, RAW_INPUT_FORMAT, RAW_PIXEL_FORMAT, STDIN_PIPE
from ..domain.codec import CodecProfile, resolve_codec
from ..domain.exceptions import (
    InvalidGeometryException,
    PipeUnavailableException,
    SpawnFailedException,
)
from ..domain.session import EncodeSession
from ..utils.ffmpeg_utils import format_command, resolve_ffmpeg


def build_ffmpeg_command(
    ffmpeg_path: str,
    output_path: Union[str, Path],
    width: int,
    height: int,
    fps: int,
    profile: CodecProfile,
) -> List[str]:
    """
    Builds the FFmpeg argument vector for a raw RGBA stream on stdin.

    The input is declared as headerless rawvideo so FFmpeg slices stdin into
    frames purely by byte count: `width * height * 4` bytes per frame.

    Returns:
        The full argument vector, starting with `ffmpeg_path`.
    """
    cmd_list = [
        ffmpeg_path,
        "-y",
        "-f", RAW_INPUT_FORMAT,
        "-vcodec", RAW_INPUT_FORMAT,
        "-pix_fmt", RAW_PIXEL_FORMAT,
        "-s", f"{width}x{height}",
        "-r", str(fps),
        "-i", STDIN_PIPE,
    ]
    cmd_list.extend(profile.args)
    cmd_list.extend(["-movflags", FASTSTART_FLAGS])
    cmd_list.append(str(output_path))
    return cmd_list


def _validate_geometry(width: int, height: int, fps: int) -> Tuple[int, int, int]:
    checked = []
    for name, value in (("width", width), ("height", height), ("fps", fps)):
        if isinstance(value, bool):
            raise InvalidGeometryException(f"{name} must be a positive integer, got {value!r}")
        try:
            number = operator.index(value)
        except TypeError:
            raise InvalidGeometryException(f"{name} must be a positive integer, got {value!r}") from None
        if number <= 0:
            raise InvalidGeometryException(f"{name} must be a positive integer, got {value!r}")
        checked.append(number)
    return checked[0], checked[1], checked[2]


def launch_session(
    output_path: Union[str, Path],
    width: int,
    height: int,
    fps: int,
    codec: str,
    ffmpeg_path: Optional[str] = None,
) -> EncodeSession:
    """
    Spawns FFmpeg and wraps it in a new `EncodeSession`.

    FFmpeg's stdout and stderr are discarded; its stdin is a pipe owned by the
    returned session.

    Args:
        output_path: The file FFmpeg writes. An existing file is overwritten.
        width: Frame width in pixels, > 0.
        height: Frame height in pixels, > 0.
        fps: Frame rate declared to FFmpeg, > 0.
        codec: 'h264', 'prores' or 'ffv1'. Anything else falls back to 'h264'.
        ffmpeg_path: An explicit FFmpeg executable. Resolved when omitted.

    Raises:
        InvalidGeometryException: If width, height or fps is not positive.
        BinaryUnavailableException: If FFmpeg cannot be found.
        SpawnFailedException: If the process cannot be created.
        PipeUnavailableException: If the process has no stdin pipe.
    """
    width, height, fps = _validate_geometry(width, height, fps)
    profile = resolve_codec(codec)

    if ffmpeg_path is None:
        ffmpeg_path = resolve_ffmpeg()

    output_path = Path(output_path)
    cmd_list = build_ffmpeg_command(ffmpeg_path, output_path, width, height, fps, profile)
    logger.debug(f"Launching FFmpeg: {format_command(cmd_list)}")

    try:
        process = subprocess.Popen(
            cmd_list,
            stdin=subprocess.PIPE,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as e:
        raise SpawnFailedException(f"Failed to spawn FFmpeg: {e}") from e

    if process.stdin is None:
        process.kill()
        process.wait()
        raise PipeUnavailableException()

    session = EncodeSession(
        process=process,
        pipe=process.stdin,
        width=width,
        height=height,
        fps=fps,
        output_path=output_path,
        codec=profile,
        command=cmd_list,
    )
    logger.info(
        f"FFmpeg started (pid {process.pid}): {width}x{height}@{fps}fps, "
        f"codec={profile.name}, output='{output_path}'"
    )
    return session
