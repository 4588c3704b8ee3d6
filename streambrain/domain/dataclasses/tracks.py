from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


@dataclass
class TrackInfo:
    id: int               # position among streams of the same type
    language: str
    codec: str
    codec_name: str


@dataclass
class TrackListing:
    video: List[TrackInfo] = field(default_factory=list)
    audio: List[TrackInfo] = field(default_factory=list)
    # Subtitle selection is not supported; always empty.
    subtitle: List[TrackInfo] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
