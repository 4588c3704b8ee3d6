# streambrain/domain/policies/encoder_params.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from streambrain.common.numbers import clamp, round_half_up
from streambrain.domain.entities.profile import EncodedProfile, EncoderParams, Profile

log = logging.getLogger(__name__)

# Indexed by Profile.quality_index; anything else falls back to the defaults.
X264_CRF: Sequence[int] = (24, 22, 20, 18)
X264_PRESETS: Sequence[str] = ("slow", "medium", "fast", "veryfast")
DEFAULT_X264_CRF = 23
DEFAULT_X264_PRESET = "fast"

SUBME_HEIGHT_LIMIT = 480
CHUNK_DURATION_SEC = 8

AUDIO_SHARE = 0.10
AUDIO_MIN_KBPS = 64
AUDIO_MAX_KBPS = 2048
VIDEO_OVERHEAD_FACTOR = 0.98  # container/muxing headroom


def _lookup(table: Sequence, index: Optional[int], default):
    if index is None or index < 0 or index >= len(table):
        return default
    return table[index]


def audio_bitrate_for(bitrate: int) -> int:
    return round_half_up(clamp(bitrate * AUDIO_SHARE, AUDIO_MIN_KBPS, AUDIO_MAX_KBPS))


def derive_encoder_params(profile: Profile, *, min_video_bitrate: int = 1) -> EncoderParams:
    """
    Map a ladder profile to x264 settings and an audio/video bitrate split (kbps).
    The original entry has no quality index and always gets the defaults.
    Video bitrate is floored at `min_video_bitrate`; tiny source bitrates would
    otherwise go negative once audio is taken out.
    """
    quality_index = None if profile.original else profile.quality_index

    audio_bitrate = audio_bitrate_for(profile.bitrate)
    video_bitrate = round_half_up((profile.bitrate - audio_bitrate) * VIDEO_OVERHEAD_FACTOR)
    if video_bitrate < min_video_bitrate:
        log.warning(
            "Profile %s: video bitrate %s kbps below floor, clamped to %s kbps",
            profile.id, video_bitrate, min_video_bitrate,
        )
        video_bitrate = min_video_bitrate

    return EncoderParams(
        x264subme=2 if profile.height <= SUBME_HEIGHT_LIMIT else 0,
        x264crf=_lookup(X264_CRF, quality_index, DEFAULT_X264_CRF),
        x264preset=_lookup(X264_PRESETS, quality_index, DEFAULT_X264_PRESET),
        audio_bitrate=audio_bitrate,
        video_bitrate=video_bitrate,
        chunk_duration=CHUNK_DURATION_SEC,
    )


def encode_profile(profile: Profile, *, min_video_bitrate: int = 1) -> EncodedProfile:
    return EncodedProfile(profile=profile, params=derive_encoder_params(profile, min_video_bitrate=min_video_bitrate))
