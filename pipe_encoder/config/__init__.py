"""
Configuration Package for the Pipe Encoder.

This package centralizes the static configuration settings for the application.
Keeping them apart from the session logic means the FFmpeg invocation, the raw
frame format and the logger layout can be adjusted without touching the code
that drives the transcoder.

This package includes settings for:
- The raw input format expected on the transcoder's standard input.
- The codec profiles (FFmpeg output arguments) selectable at session start.
- Common application settings like the logging format and project paths.
- User-overridable paths for the FFmpeg executables.
"""
