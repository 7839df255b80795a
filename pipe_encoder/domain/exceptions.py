"""
Defines custom exception types for the Pipe Encoder application.

Every failure of `start`, `send` and `stop` is raised as one of these exceptions.
The message of each one is written for people: the command layer returns
`str(exc)` as the error text shown to the user.

All custom exceptions inherit from the base `PipeEncoderException`.
"""


class PipeEncoderException(Exception):
    """Base class for all custom exceptions in the Pipe Encoder application."""

    pass


# --- Session State Exceptions ---
class SessionStateException(PipeEncoderException):
    """Base class for operations attempted in the wrong session state."""

    pass


class AlreadyActiveException(SessionStateException):
    """
    Raised by `start` when a session is already recording.

    Only one FFmpeg session may exist at a time. The running session is left
    untouched.
    """

    def __init__(self, message: str = "FFmpeg session already active"):
        super().__init__(message)


class NoActiveSessionException(SessionStateException):
    """Raised by `send` or `stop` when no session has been started."""

    def __init__(self, message: str = "No active FFmpeg session"):
        super().__init__(message)


# --- Launch Exceptions ---
class LaunchException(PipeEncoderException):
    """Base class for exceptions raised while starting the FFmpeg process."""

    pass


class InvalidGeometryException(LaunchException):
    """Raised when the width, height or frame rate is not strictly positive."""

    pass


class BinaryUnavailableException(LaunchException):
    """
    Raised when the FFmpeg executable cannot be located.

    Neither the configured `ffmpeg_dir` nor the system PATH provided a usable
    binary.
    """

    pass


class SpawnFailedException(LaunchException):
    """Raised when the operating system refuses to create the FFmpeg process."""

    pass


class PipeUnavailableException(LaunchException):
    """Raised when the spawned process exposes no writable stdin pipe."""

    def __init__(self, message: str = "Failed to get FFmpeg stdin"):
        super().__init__(message)


# --- Frame Exceptions ---
class FrameException(PipeEncoderException):
    """
    Base class for exceptions raised while sending a frame.

    These never tear the session down: the caller may send another frame or stop.
    """

    pass


class UnsupportedFrameException(FrameException):
    """Raised when a frame is not a bytes-like object, or its buffer cannot be read as bytes."""

    pass


class FrameSizeMismatchException(FrameException):
    """
    Raised when a frame's byte length differs from width * height * 4.

    Nothing is written to the pipe, so FFmpeg's framing stays in sync.
    """

    def __init__(self, got: int, expected: int):
        self.got = got
        self.expected = expected
        super().__init__(f"Frame size mismatch: got {got} bytes, expected {expected}")


class PipeWriteException(FrameException):
    """Raised when writing to FFmpeg's stdin fails, usually because FFmpeg exited."""

    pass


# --- Shutdown Exceptions ---
class ShutdownException(PipeEncoderException):
    """Base class for exceptions raised while finalizing a recording."""

    pass


class WaitException(ShutdownException):
    """Raised when the operating system cannot report the FFmpeg process's exit."""

    pass


class EncodingFailedException(ShutdownException):
    """
    Raised when FFmpeg exits with a non-zero status.

    The output file may be missing, truncated or unplayable.
    """

    def __init__(self, exit_code: int):
        self.exit_code = exit_code
        super().__init__(f"FFmpeg exited with code {exit_code}")


# --- Media Probe Exceptions ---
class MediaProbeException(PipeEncoderException):
    """Base class for exceptions related to inspecting an encoded file."""

    pass


class ProbeFailedException(MediaProbeException):
    """Raised when ffprobe cannot read the output file or finds no video stream."""

    pass
