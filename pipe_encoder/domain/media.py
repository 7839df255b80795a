"""
Provides `RecordedVideo`, a read-only description of an encoded output file.

The description is obtained with `ffmpeg.probe`, which runs ffprobe and returns
its JSON report. Frames are counted by decoding the video stream, so the frame
count reflects what was actually muxed rather than container metadata.
"""

from dataclasses import dataclass
from pathlib import Path
from pprint import pformat
from typing import Optional

import ffmpeg
from loguru import logger

from .exceptions import ProbeFailedException


@dataclass(frozen=True)
class RecordedVideo:
    """
    Attributes:
        path: Absolute path of the encoded file.
        size: File size in bytes.
        codec_name: The video codec ffprobe reports (e.g. 'h264', 'prores', 'ffv1').
        width: Encoded width in pixels.
        height: Encoded height in pixels.
        frame_count: Frames decoded from the first video stream.
    """

    path: Path
    size: int
    codec_name: str
    width: int
    height: int
    frame_count: int


def probe_output(path: Path, ffprobe_cmd: str = "ffprobe") -> RecordedVideo:
    """
    Probes an encoded file and describes its first video stream.

    Args:
        path: The encoded file.
        ffprobe_cmd: The ffprobe executable to run.

    Returns:
        A `RecordedVideo` for the file.

    Raises:
        ProbeFailedException: If the file does not exist, ffprobe fails, or the
                              file has no video stream.
    """
    path = Path(path)
    if not path.is_file():
        raise ProbeFailedException(f"Output file not found: {path}")

    try:
        probe = ffmpeg.probe(
            str(path),
            cmd=ffprobe_cmd,
            select_streams="v:0",
            count_frames=None,
        )
    except ffmpeg.Error as e:
        stderr = e.stderr.decode("utf-8", errors="replace") if e.stderr else ""
        logger.error(f"ffmpeg.probe failed for {path}: {stderr}")
        raise ProbeFailedException(f"Failed to probe {path}: {stderr.strip()}") from e
    except FileNotFoundError as e:
        raise ProbeFailedException(f"ffprobe not found: '{ffprobe_cmd}'") from e

    logger.trace(f"Probe data for {path.name}:\n{pformat(probe)}")

    streams = probe.get("streams") or []
    if not streams:
        raise ProbeFailedException(f"No video stream found in {path}")
    stream = streams[0]

    return RecordedVideo(
        path=path.resolve(),
        size=path.stat().st_size,
        codec_name=stream.get("codec_name", ""),
        width=int(stream.get("width", 0)),
        height=int(stream.get("height", 0)),
        frame_count=_frame_count(stream),
    )


def _frame_count(stream: dict) -> int:
    # nb_read_frames is only present when ffprobe decoded the stream.
    value: Optional[str] = stream.get("nb_read_frames") or stream.get("nb_frames")
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0
