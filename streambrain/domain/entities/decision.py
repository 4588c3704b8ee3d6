# streambrain/domain/entities/decision.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple, Union

from streambrain.domain.enums.codec_type import CodecType
from streambrain.domain.enums.delivery_protocol import DeliveryProtocol
from streambrain.domain.enums.stream_action import StreamAction


@dataclass(frozen=True)
class StreamPlan:
    """
    Per-stream delivery plan. `stream_id` is the position among streams of the same type,
    matching the ids handed out by the track listing.
    """
    codec_type: CodecType
    stream_id: int
    action: StreamAction
    codec: Optional[str] = None
    start_delay: float = 0.0          # seconds
    bitrate: Optional[int] = None     # target kbps when transcoding
    width: Optional[int] = None
    height: Optional[int] = None

    @property
    def transcode(self) -> bool:
        return self.action is StreamAction.transcode


@dataclass(frozen=True)
class Decision:
    protocol: DeliveryProtocol
    duration: Optional[float]
    chunk_duration: int
    start_chunk_at: int = 0
    streams: Tuple[StreamPlan, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class NoViableProtocol:
    """Recoverable outcome: nothing in the compatibility map could deliver the source."""
    reason: str
    considered: Tuple[DeliveryProtocol, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return False


SelectionResult = Union[Decision, NoViableProtocol]
