"""
Services Package for the Pipe Encoder Application.

This package contains the "service layer": the classes and functions that carry
a recording through its lifecycle.

- **Process Launcher (`launch_session`):**
  Resolves FFmpeg, builds the argument vector for the requested geometry, frame
  rate and codec, and spawns FFmpeg with its stdin connected to a pipe.

- **Frame Writer (`write_frame`):**
  Checks each frame's byte length against the session geometry and writes it to
  FFmpeg's stdin.

- **Shutdown Service (`finalize_session`):**
  Closes the pipe so FFmpeg sees end-of-stream, waits for it to finish the file
  and checks its exit status.

- **Session Store (`SessionStore`):**
  Holds at most one active session and serializes `start`, `send` and `stop`
  across threads.
"""

from .frame_writer import write_frame
from .process_launcher import build_ffmpeg_command, launch_session
from .session_store import SessionStore
from .shutdown_service import finalize_session

__all__ = [
    "SessionStore",
    "build_ffmpeg_command",
    "finalize_session",
    "launch_session",
    "write_frame",
]
