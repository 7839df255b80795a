"""
The command layer consumed by a user interface.

Each command drives the default session store and reports the outcome as plain
text: `None` on success, or a human-readable error message the caller can show
to the user. Errors are also logged. Nothing is retried.
"""

from pathlib import Path
from typing import Optional, Union

from loguru import logger

from .domain.exceptions import PipeEncoderException
from .services import session_store


def start_encode(
    output_path: Union[str, Path],
    width: int,
    height: int,
    fps: int,
    codec: str,
) -> Optional[str]:
    """Starts an FFmpeg recording. `codec` is 'h264', 'prores' or 'ffv1'."""
    try:
        session_store.start(output_path, width, height, fps, codec)
    except PipeEncoderException as e:
        logger.error(f"start_encode failed: {e}")
        return str(e)
    return None


def send_frame(data) -> Optional[str]:
    """Sends one raw RGBA frame (width * height * 4 bytes) to FFmpeg."""
    try:
        session_store.send(data)
    except PipeEncoderException as e:
        logger.error(f"send_frame failed: {e}")
        return str(e)
    return None


def stop_encode() -> Optional[str]:
    """Closes FFmpeg's stdin and waits for the output file to be finalized."""
    try:
        session_store.stop()
    except PipeEncoderException as e:
        logger.error(f"stop_encode failed: {e}")
        return str(e)
    return None
