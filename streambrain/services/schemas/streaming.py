# services/schemas/streaming.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from streambrain.common.strings.splitters import csv_to_lower_list
from streambrain.domain.enums import CodecType, DeliveryProtocol, StreamAction


class SourceRequest(BaseModel):
    source: str = Field(..., min_length=1, description="Path of the media file to analyze",
                        examples=["/media/library/movie.mkv"])


# ---------------------------------------------------------------- tracks
class TrackRead(BaseModel):
    id: int
    language: str = Field(..., examples=["eng"])
    codec: str = Field(..., examples=["h264"])
    codec_name: str = Field(..., examples=["H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10"])

    model_config = ConfigDict(from_attributes=True)


class TracksResponse(BaseModel):
    video: List[TrackRead] = Field(default_factory=list)
    audio: List[TrackRead] = Field(default_factory=list)
    subtitle: List[TrackRead] = Field(default_factory=list)


# ---------------------------------------------------------------- profiles
class ProfileRead(BaseModel):
    id: int
    height: int
    width: int
    bitrate: int = Field(..., description="kbps")
    quality_index: Optional[int] = None
    resized: bool
    original: bool

    model_config = ConfigDict(from_attributes=True)


class EncodedProfileRead(ProfileRead):
    x264subme: int
    x264crf: int
    x264preset: str
    audio_bitrate: int = Field(..., description="kbps")
    video_bitrate: int = Field(..., description="kbps")
    chunk_duration: int = Field(..., description="seconds")


# ---------------------------------------------------------------- compatibility
class CompatibilityRulesSchema(BaseModel):
    containers: List[str] = Field(default_factory=list, examples=[["mp4", "mov"]])
    video_codecs: List[str] = Field(default_factory=list, examples=[["h264"]])
    audio_codecs: List[str] = Field(default_factory=list, examples=[["aac", "mp3"]])
    max_width: Optional[int] = Field(None, gt=0)
    max_height: Optional[int] = Field(None, gt=0)
    max_bitrate_kbps: Optional[int] = Field(None, gt=0)
    max_audio_channels: Optional[int] = Field(None, gt=0)

    @field_validator("containers", "video_codecs", "audio_codecs", mode="before")
    @classmethod
    def _split_csv(cls, v):
        return csv_to_lower_list(v)


class CompatibilityEntrySchema(BaseModel):
    type: DeliveryProtocol
    rules: Optional[CompatibilityRulesSchema] = None


class DecisionRequest(SourceRequest):
    compatibility_map: List[CompatibilityEntrySchema] = Field(default_factory=list)
    profile_id: int = Field(0, ge=0)
    chunk_duration: Optional[int] = Field(None, gt=0, description="Override the profile chunk duration (seconds)")
    video_streams: List[int] = Field(default_factory=lambda: [0])
    audio_streams: List[int] = Field(default_factory=lambda: [0])


# ---------------------------------------------------------------- decision
class StreamPlanRead(BaseModel):
    codec_type: CodecType
    stream_id: int
    action: StreamAction
    transcode: bool
    codec: Optional[str] = None
    start_delay: float = 0.0
    bitrate: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class DecisionRead(BaseModel):
    protocol: DeliveryProtocol
    duration: Optional[float] = None
    chunk_duration: int
    start_chunk_at: int
    streams: List[StreamPlanRead] = Field(default_factory=list)
