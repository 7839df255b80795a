"""Tests for codec profile lookup."""

import pytest

from pipe_encoder.domain.codec import CODEC_PROFILES, resolve_codec, supported_codecs


def test_supported_codecs():
    assert supported_codecs() == ("h264", "prores", "ffv1")


def test_h264_profile():
    profile = resolve_codec("h264")
    assert profile.args == ("-c:v", "libx264", "-preset", "slow", "-crf", "18", "-pix_fmt", "yuv420p")
    assert profile.extension == ".mp4"


def test_prores_profile():
    profile = resolve_codec("prores")
    assert profile.args == (
        "-c:v", "prores_ks", "-profile:v", "3", "-vendor", "apl0", "-pix_fmt", "yuv422p10le",
    )
    assert profile.extension == ".mov"


def test_ffv1_profile():
    profile = resolve_codec("ffv1")
    assert profile.args == (
        "-c:v", "ffv1", "-level", "3", "-coder", "1", "-context", "1", "-pix_fmt", "yuv420p",
    )
    assert profile.extension == ".mkv"


@pytest.mark.parametrize("selector", ["unknownvalue", "", "H264", "vp9"])
def test_unknown_selector_falls_back_to_h264(selector, log_messages):
    assert resolve_codec(selector) is CODEC_PROFILES["h264"]
    assert any("falling back to 'h264'" in m for m in log_messages)


def test_profiles_are_immutable():
    with pytest.raises(AttributeError):
        resolve_codec("ffv1").name = "h264"
