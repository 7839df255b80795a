"""
Finalizes a recording: signals end-of-stream to FFmpeg and waits for it to
finish writing the output file.
"""

from datetime import datetime

from loguru import logger

from ..domain.exceptions import EncodingFailedException, WaitException
from ..domain.session import EncodeSession, RecordingSummary
from ..utils.ffmpeg_utils import format_command
from ..utils.format_utils import format_timedelta, formatted_size


def finalize_session(session: EncodeSession) -> RecordingSummary:
    """
    Closes FFmpeg's stdin and blocks until the process exits.

    Closing stdin is the only end-of-stream signal FFmpeg gets; it then flushes
    the encoder and writes the container trailer. There is no timeout.

    Returns:
        A `RecordingSummary` of the finished recording.

    Raises:
        WaitException: If the exit status cannot be obtained.
        EncodingFailedException: If FFmpeg exits with a non-zero status.
    """
    logger.debug(f"Closing FFmpeg stdin (pid {session.pid}) after {session.frames_written} frame(s).")
    try:
        session.pipe.close()
    except BrokenPipeError as e:
        # FFmpeg already went away; its exit status tells the rest.
        logger.warning(f"FFmpeg stdin was already broken on close (pid {session.pid}): {e}")
    except OSError as e:
        # The process must still be reaped.
        logger.warning(f"Closing FFmpeg stdin failed (pid {session.pid}): {e}")

    try:
        return_code = session.process.wait()
    except OSError as e:
        raise WaitException(f"FFmpeg wait error: {e}") from e

    elapsed = datetime.now() - session.started_at
    if return_code != 0:
        logger.error(
            f"FFmpeg (pid {session.pid}) exited with code {return_code} for '{session.output_path}'. "
            f"Command: {format_command(session.command)}"
        )
        raise EncodingFailedException(return_code)

    summary = RecordingSummary(
        output_path=session.output_path,
        codec=session.codec.name,
        width=session.width,
        height=session.height,
        fps=session.fps,
        frames_written=session.frames_written,
        bytes_written=session.bytes_written,
        elapsed=elapsed,
    )
    logger.info(
        f"Recording finished: '{summary.output_path}', {summary.frames_written} frame(s), "
        f"{formatted_size(summary.bytes_written)} raw in {format_timedelta(summary.elapsed)}"
    )
    return summary
