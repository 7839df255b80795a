"""
This package contains the core domain models of the Pipe Encoder application.

Modules:
    exceptions.py: Defines the exception types raised by the session operations.
                   Their messages are human readable, so the command layer can
                   hand them straight to a user interface.
    codec.py: Contains `CodecProfile`, the immutable mapping from a codec selector
              to the FFmpeg output arguments, and the lookup with its `h264`
              fallback.
    session.py: Defines `EncodeSession`, the live state of one recording (the
                FFmpeg process, its stdin pipe and the fixed frame geometry), and
                `RecordingSummary`, the report produced once it is finalized.
    media.py: Contains `RecordedVideo`, a view of an encoded output file obtained
              by wrapping `ffprobe`.
"""
