"""
Synthetic RGBA frames for exercising a recording without a real frame source.
"""

from typing import Tuple

from ..config.video import BYTES_PER_PIXEL

PATTERNS = ("black", "gradient", "bars")

# SMPTE-style colour bars, left to right.
_BAR_COLOURS: Tuple[Tuple[int, int, int], ...] = (
    (192, 192, 192),
    (192, 192, 0),
    (0, 192, 192),
    (0, 192, 0),
    (192, 0, 192),
    (192, 0, 0),
    (0, 0, 192),
    (16, 16, 16),
)


def frame_size(width: int, height: int) -> int:
    return width * height * BYTES_PER_PIXEL


def make_frame(pattern: str, width: int, height: int, index: int = 0) -> bytes:
    """
    Builds one opaque RGBA frame.

    Args:
        pattern: 'black' (all zero bytes), 'gradient' (a horizontal ramp that
                 scrolls one pixel per frame) or 'bars' (colour bars).
        width: Frame width in pixels.
        height: Frame height in pixels.
        index: Frame number, used to animate the gradient.

    Returns:
        Exactly `width * height * 4` bytes, rows top to bottom.
    """
    if pattern == "black":
        return bytes(frame_size(width, height))

    row = bytearray()
    if pattern == "gradient":
        for x in range(width):
            level = ((x + index) * 255 // max(width - 1, 1)) % 256
            row += bytes((level, level, 255 - level, 255))
    elif pattern == "bars":
        for x in range(width):
            r, g, b = _BAR_COLOURS[x * len(_BAR_COLOURS) // width]
            row += bytes((r, g, b, 255))
    else:
        raise ValueError(f"Unknown pattern '{pattern}'. Choose from: {', '.join(PATTERNS)}")

    return bytes(row) * height
