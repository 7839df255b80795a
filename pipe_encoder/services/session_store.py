"""
This module holds the single active recording and arbitrates access to it.

`SessionStore` is an exclusive-ownership slot: `start` installs a session only
if the slot is empty, `stop` takes the session out before tearing it down, and
`send` borrows it in between. One lock serializes all three, and is held for the
whole operation, including the pipe write and the wait for FFmpeg. Frames are
therefore written strictly in call order, and a `stop` issued from another thread
waits until an in-flight `send` has finished.
"""

import threading
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from ..domain.exceptions import AlreadyActiveException, NoActiveSessionException
from ..domain.session import EncodeSession, RecordingSummary
from .frame_writer import write_frame
from .process_launcher import launch_session
from .shutdown_service import finalize_session


class SessionStore:
    """
    Process-wide holder of at most one `EncodeSession`.

    State machine:
        Idle   --start ok-->    Active
        Idle   --start error--> Idle
        Active --send-->        Active   (whether or not the frame was accepted)
        Active --stop-->        Idle     (whether or not FFmpeg succeeded)
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._session: Optional[EncodeSession] = None

    def is_active(self) -> bool:
        with self._lock:
            return self._session is not None

    def start(
        self,
        output_path: Union[str, Path],
        width: int,
        height: int,
        fps: int,
        codec: str = "h264",
        ffmpeg_path: Optional[str] = None,
    ) -> None:
        """
        Starts a new recording.

        Raises:
            AlreadyActiveException: If a recording is already running. It is left
                                    untouched.
            LaunchException: Any launch failure from `launch_session`. The store
                             stays idle.
        """
        with self._lock:
            if self._session is not None:
                raise AlreadyActiveException()
            self._session = launch_session(output_path, width, height, fps, codec, ffmpeg_path=ffmpeg_path)

    def send(self, data) -> None:
        """
        Writes one frame to the active recording.

        Raises:
            NoActiveSessionException: If no recording is running.
            FrameException: If the frame is rejected. The recording stays active.
        """
        with self._lock:
            if self._session is None:
                raise NoActiveSessionException()
            write_frame(self._session, data)

    def stop(self) -> RecordingSummary:
        """
        Finalizes the active recording.

        The slot is emptied before FFmpeg is waited on, so the store is idle
        afterwards even if finalizing fails.

        Raises:
            NoActiveSessionException: If no recording is running.
            ShutdownException: If FFmpeg cannot be waited on or exits with an error.
        """
        with self._lock:
            session, self._session = self._session, None
            if session is None:
                raise NoActiveSessionException()
            logger.debug(f"Stopping {session!r}")
            return finalize_session(session)


# The store behind the module-level `start`, `send`, `stop` entry points.
default_store = SessionStore()


def start(
    output_path: Union[str, Path],
    width: int,
    height: int,
    fps: int,
    codec: str = "h264",
) -> None:
    default_store.start(output_path, width, height, fps, codec)


def send(data) -> None:
    default_store.send(data)


def stop() -> RecordingSummary:
    return default_store.stop()


def is_active() -> bool:
    return default_store.is_active()
