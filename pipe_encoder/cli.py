"""
Command-Line Interface (CLI) for the Pipe Encoder.

Records a synthetic test pattern through the full start -> send -> stop cycle,
which makes it easy to check an FFmpeg installation and compare codec profiles.
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config.common import DEFAULT_LOG_LEVEL, LOGGER_FORMAT
from .config.video import DEFAULT_CODEC
from .domain.codec import resolve_codec, supported_codecs
from .domain.exceptions import MediaProbeException, PipeEncoderException
from .domain.media import probe_output
from .services import session_store
from .utils.ffmpeg_utils import resolve_ffprobe, verify_ffmpeg
from .utils.format_utils import format_timedelta, formatted_size
from .utils.frame_utils import PATTERNS, make_frame


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parses command-line arguments.

    Returns:
        argparse.Namespace: The parsed arguments. `output` is filled in from the
                            codec's recommended extension when omitted.
    """
    parser = argparse.ArgumentParser(
        prog="pipe-encoder",
        description="Record a synthetic RGBA test pattern to a video file through FFmpeg.",
    )
    parser.add_argument(
        "output", nargs="?", default=None,
        help="Output video file. Defaults to 'test_pattern' plus the codec's container extension.",
    )
    parser.add_argument("--width", type=_positive_int, default=640, help="Frame width in pixels.")
    parser.add_argument("--height", type=_positive_int, default=360, help="Frame height in pixels.")
    parser.add_argument("--fps", type=_positive_int, default=30, help="Frame rate.")
    parser.add_argument(
        "--codec", type=str, default=DEFAULT_CODEC,
        help=f"Codec profile ({', '.join(supported_codecs())}). Unknown values fall back to {DEFAULT_CODEC}.",
    )
    parser.add_argument("--frames", type=int, default=90, help="Number of frames to record.")
    parser.add_argument("--pattern", choices=PATTERNS, default="gradient", help="Test pattern to draw.")
    parser.add_argument(
        "--verify", action="store_true",
        help="Probe the output with ffprobe afterwards and check the encoded frame count.",
    )
    parser.add_argument(
        "--log-level", type=str, default=DEFAULT_LOG_LEVEL,
        choices=["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set the logging level.",
    )

    args = parser.parse_args(argv)
    if args.frames < 0:
        parser.error(f"--frames must not be negative, got {args.frames}")
    if args.output is None:
        args.output = f"test_pattern{resolve_codec(args.codec).extension}"
    args.output = Path(args.output)
    return args


def record(args: argparse.Namespace) -> int:
    """Runs one recording. Returns the process exit code."""
    try:
        session_store.start(args.output, args.width, args.height, args.fps, args.codec)
    except PipeEncoderException as e:
        logger.error(f"Could not start recording: {e}")
        return 1

    try:
        for index in range(args.frames):
            session_store.send(make_frame(args.pattern, args.width, args.height, index))
    except PipeEncoderException as e:
        logger.error(f"Recording aborted: {e}")
        try:
            session_store.stop()
        except PipeEncoderException as stop_error:
            logger.error(f"Stopping after the failure also failed: {stop_error}")
        return 1

    try:
        summary = session_store.stop()
    except PipeEncoderException as e:
        logger.error(f"Could not finalize recording: {e}")
        return 1

    logger.success(
        f"Wrote {summary.frames_written} frame(s) to '{summary.output_path}' "
        f"({formatted_size(summary.output_path.stat().st_size)}) in {format_timedelta(summary.elapsed)}"
    )

    if args.verify:
        try:
            video = probe_output(summary.output_path, resolve_ffprobe())
        except MediaProbeException as e:
            logger.error(f"Verification failed: {e}")
            return 1
        logger.info(
            f"Probed '{video.path.name}': {video.codec_name} {video.width}x{video.height}, "
            f"{video.frame_count} frame(s)"
        )
        if video.frame_count != summary.frames_written:
            logger.error(f"Expected {summary.frames_written} encoded frame(s), found {video.frame_count}")
            return 1
    return 0


def configure_logging(level: str) -> int:
    """Replaces the default loguru sink with one on stderr at `level`."""
    logger.remove()
    return logger.add(sys.stderr, level=level, format=LOGGER_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    args = get_args(argv)

    configure_logging(args.log_level)
    logger.debug(f"Parsed arguments: {args}")

    verify_ffmpeg()
    return record(args)
