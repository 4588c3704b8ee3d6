# streambrain/domain/entities/compatibility.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, FrozenSet, Optional, Tuple

from streambrain.domain.enums.delivery_protocol import DeliveryProtocol


@dataclass(frozen=True)
class CompatibilityEntry:
    """
    What a client accepts for one delivery protocol.
    `rules` is opaque to the decision engine; only the compatibility evaluator reads it.
    """
    type: DeliveryProtocol
    rules: Any = None


@dataclass(frozen=True)
class CompatibilityRules:
    """
    Rule set understood by the built-in evaluator.
    Empty codec/container sets mean "anything"; None limits mean "unbounded".
    """
    containers: FrozenSet[str] = field(default_factory=frozenset)
    video_codecs: FrozenSet[str] = field(default_factory=frozenset)
    audio_codecs: FrozenSet[str] = field(default_factory=frozenset)
    max_width: Optional[int] = None
    max_height: Optional[int] = None
    max_bitrate_kbps: Optional[int] = None
    max_audio_channels: Optional[int] = None


@dataclass(frozen=True)
class DirectPlayVerdict:
    ok: bool
    reasons: Tuple[str, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return self.ok
