from __future__ import annotations
from enum import StrEnum


class CodecType(StrEnum):
    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"
    OTHER = "other"

    @classmethod
    def from_ffprobe(cls, raw: str | None) -> "CodecType":
        try:
            return cls((raw or "").lower())
        except ValueError:
            return cls.OTHER
