"""
Codec profiles: which compression scheme FFmpeg applies to the raw frames.
"""

from dataclasses import dataclass
from typing import Tuple

from loguru import logger

from ..config.video import CODEC_EXTENSIONS, CODEC_PROFILE_ARGS, DEFAULT_CODEC


@dataclass(frozen=True)
class CodecProfile:
    """
    An immutable set of FFmpeg output arguments for one codec.

    Attributes:
        name: The codec selector this profile answers to ('h264', 'prores', 'ffv1').
        args: The output arguments, in the order they are passed to FFmpeg.
        extension: The container extension a caller should propose for the output.
    """

    name: str
    args: Tuple[str, ...]
    extension: str


CODEC_PROFILES = {
    name: CodecProfile(name=name, args=args, extension=CODEC_EXTENSIONS[name])
    for name, args in CODEC_PROFILE_ARGS.items()
}


def resolve_codec(selector: str) -> CodecProfile:
    """
    Returns the profile for a codec selector.

    Unrecognized selectors are not an error: they fall back to the default
    `h264` profile.
    """
    profile = CODEC_PROFILES.get(selector)
    if profile is None:
        logger.warning(f"Unknown codec '{selector}', falling back to '{DEFAULT_CODEC}'.")
        profile = CODEC_PROFILES[DEFAULT_CODEC]
    return profile


def supported_codecs() -> Tuple[str, ...]:
    return tuple(CODEC_PROFILES)
