"""
Utilities Package for the Pipe Encoder Application.

Modules:
    - ffmpeg_utils.py: Locates, updates and verifies the FFmpeg executables, and
      renders command lines for logging.
    - format_utils.py: Helper functions for turning durations and byte counts into
      human-readable strings.
    - frame_utils.py: Builds synthetic RGBA frames used by the command-line front
      end to exercise a full recording.
"""
