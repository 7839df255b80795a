"""
Pipe Encoder: records raw RGBA frames to a video file by streaming them into an
FFmpeg process over its standard input.

Typical use:

    from pipe_encoder import start, send, stop

    start("out.mp4", width=64, height=64, fps=30, codec="h264")
    send(bytes(64 * 64 * 4))
    summary = stop()

Only one recording can be active per process. `start`, `send` and `stop` are safe
to call from different threads.
"""

from .domain.codec import CodecProfile, resolve_codec, supported_codecs
from .domain.exceptions import (
    AlreadyActiveException,
    BinaryUnavailableException,
    EncodingFailedException,
    FrameSizeMismatchException,
    InvalidGeometryException,
    NoActiveSessionException,
    PipeEncoderException,
    PipeUnavailableException,
    PipeWriteException,
    SpawnFailedException,
    UnsupportedFrameException,
    WaitException,
)
from .domain.session import RecordingSummary
from .services.session_store import SessionStore, is_active, send, start, stop

__version__ = "0.1.0"

__all__ = [
    "AlreadyActiveException",
    "BinaryUnavailableException",
    "CodecProfile",
    "EncodingFailedException",
    "FrameSizeMismatchException",
    "InvalidGeometryException",
    "NoActiveSessionException",
    "PipeEncoderException",
    "PipeUnavailableException",
    "PipeWriteException",
    "RecordingSummary",
    "SessionStore",
    "SpawnFailedException",
    "UnsupportedFrameException",
    "WaitException",
    "is_active",
    "resolve_codec",
    "send",
    "start",
    "stop",
    "supported_codecs",
]
