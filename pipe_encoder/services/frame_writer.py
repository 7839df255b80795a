"""
Writes raw RGBA frames to a session's FFmpeg stdin.
"""

from loguru import logger

from ..domain.exceptions import FrameSizeMismatchException, PipeWriteException, UnsupportedFrameException
from ..domain.session import EncodeSession


def write_frame(session: EncodeSession, data) -> None:
    """
    Validates one frame and writes it to FFmpeg.

    The length check happens before any I/O: a wrongly sized frame would shift
    every following frame in FFmpeg's rawvideo demuxer.

    Args:
        session: The active session.
        data: Any object exposing a buffer (bytes, bytearray,
              memoryview, a uint8 NumPy array) of exactly
              `session.frame_size` bytes.

    Raises:
        UnsupportedFrameException: If `data` does not expose a byte buffer.
        FrameSizeMismatchException: If the byte length is wrong. Nothing is written.
        PipeWriteException: If the pipe rejects the write, typically because FFmpeg
                            has exited. The session stays usable for `stop`.
    """
    try:
        raw = memoryview(data)
    except TypeError as e:
        raise UnsupportedFrameException(f"Frame must be a bytes-like object, got {type(data).__name__}") from e

    with raw:
        if not raw.c_contiguous:
            # Strided views and Fortran-order arrays are copied out in C order.
            with memoryview(raw.tobytes()) as flat:
                _write_view(session, flat)
        else:
            try:
                view = raw.cast("B")
            except TypeError as e:
                raise UnsupportedFrameException(f"Frame buffer cannot be read as bytes: {e}") from e
            with view:
                _write_view(session, view)


def _write_view(session: EncodeSession, view: memoryview) -> None:
    expected = session.frame_size
    if view.nbytes != expected:
        raise FrameSizeMismatchException(got=view.nbytes, expected=expected)

    try:
        offset = 0
        while offset < expected:
            with view[offset:] as chunk:
                written = session.pipe.write(chunk)
            if not written:
                raise PipeWriteException("FFmpeg stdin write error: pipe accepted no data")
            offset += written
        session.pipe.flush()
    except (OSError, ValueError) as e:
        raise PipeWriteException(f"FFmpeg stdin write error: {e}") from e

    session.frames_written += 1
    session.bytes_written += expected
    logger.trace(f"Frame {session.frames_written} written ({expected} bytes) to pid {session.pid}")
