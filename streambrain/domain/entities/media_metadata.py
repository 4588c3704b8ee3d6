# streambrain/domain/entities/media_metadata.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from streambrain.domain.enums.codec_type import CodecType


@dataclass(frozen=True)
class Resolution:
    width: int
    height: int

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise ValueError("Resolution dimensions must be >= 0")

    @property
    def ratio(self) -> float:
        return self.width / self.height


@dataclass(frozen=True)
class StreamInfo:
    """
    One container stream as reported by the prober.
    `index` is the container-level index; per-type positions are what clients address.
    """
    index: int
    codec_type: CodecType
    codec: Optional[str] = None           # short id, e.g. "h264"
    codec_long_name: Optional[str] = None
    language: Optional[str] = None

    # technical attributes (None when the prober did not report them)
    width: Optional[int] = None
    height: Optional[int] = None
    bitrate: Optional[int] = None         # bits per second
    channels: Optional[int] = None
    start_time: float = 0.0               # seconds
    is_default: bool = False


@dataclass(frozen=True)
class MediaMetadata:
    """
    Immutable snapshot produced once per source by the media prober.
    Only technical attributes; nothing here is client-specific.
    """
    streams: Tuple[StreamInfo, ...] = field(default_factory=tuple)
    duration: Optional[float] = None      # seconds
    bitrate: Optional[int] = None         # bits per second
    resolution: Optional[Resolution] = None
    container: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return not self.streams

    @property
    def video_streams(self) -> Tuple[StreamInfo, ...]:
        return tuple(s for s in self.streams if s.codec_type is CodecType.VIDEO)

    @property
    def audio_streams(self) -> Tuple[StreamInfo, ...]:
        return tuple(s for s in self.streams if s.codec_type is CodecType.AUDIO)

    @property
    def subtitle_streams(self) -> Tuple[StreamInfo, ...]:
        return tuple(s for s in self.streams if s.codec_type is CodecType.SUBTITLE)
