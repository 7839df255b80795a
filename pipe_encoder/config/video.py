"""
Configuration settings related to the raw video stream and its encoding.

This module defines the wire format of the frames written to FFmpeg's standard
input and the codec profiles that decide how FFmpeg compresses them.
"""

# --- Raw Input Settings ---
# Frames are uncompressed, interleaved RGBA, 8 bits per channel, row-major,
# concatenated on stdin with no separators.
RAW_INPUT_FORMAT = "rawvideo"
RAW_PIXEL_FORMAT = "rgba"
BYTES_PER_PIXEL = 4
STDIN_PIPE = "pipe:0"

# --- Output Settings ---
# Moves the moov atom to the front of the file once encoding finishes.
FASTSTART_FLAGS = "+faststart"

# --- Codec Profiles ---
DEFAULT_CODEC = "h264"

# Output arguments per codec selector, in the order they are passed to FFmpeg.
CODEC_PROFILE_ARGS = {
    "h264": (
        "-c:v", "libx264",
        "-preset", "slow",
        "-crf", "18",
        "-pix_fmt", "yuv420p",
    ),
    "prores": (
        "-c:v", "prores_ks",
        "-profile:v", "3",  # ProRes 422 HQ
        "-vendor", "apl0",
        "-pix_fmt", "yuv422p10le",
    ),
    "ffv1": (
        "-c:v", "ffv1",
        "-level", "3",
        "-coder", "1",
        "-context", "1",
        "-pix_fmt", "yuv420p",
    ),
}

# Container a caller should propose for each codec when naming the output file.
CODEC_EXTENSIONS = {
    "h264": ".mp4",
    "prores": ".mov",
    "ffv1": ".mkv",
}
