# streambrain/domain/entities/profile.py
from __future__ import annotations

from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Profile:
    """
    One rung of a bitrate ladder.
    `id` is the position inside the ladder it came from and means nothing for another source.
    `quality_index` is the bitrate position inside its tier; None for the original entry.
    """
    id: int
    height: int
    width: int
    bitrate: int                      # kbps
    quality_index: Optional[int] = None
    resized: bool = False
    original: bool = False


@dataclass(frozen=True)
class EncoderParams:
    x264subme: int
    x264crf: int
    x264preset: str
    audio_bitrate: int                # kbps
    video_bitrate: int                # kbps
    chunk_duration: int               # seconds


@dataclass(frozen=True)
class EncodedProfile:
    """A profile together with the encoder settings derived from it."""
    profile: Profile
    params: EncoderParams

    @property
    def id(self) -> int:
        return self.profile.id

    @property
    def width(self) -> int:
        return self.profile.width

    @property
    def height(self) -> int:
        return self.profile.height

    @property
    def bitrate(self) -> int:
        return self.profile.bitrate

    @property
    def chunk_duration(self) -> int:
        return self.params.chunk_duration

    def with_chunk_duration(self, seconds: int) -> "EncodedProfile":
        if seconds <= 0:
            raise ValueError("chunk_duration must be > 0")
        return replace(self, params=replace(self.params, chunk_duration=seconds))

    def as_dict(self) -> Dict[str, Any]:
        return {**asdict(self.profile), **asdict(self.params)}
