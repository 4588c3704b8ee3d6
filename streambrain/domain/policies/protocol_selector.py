# streambrain/domain/policies/protocol_selector.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from streambrain.domain.entities.compatibility import CompatibilityEntry
from streambrain.domain.entities.decision import Decision, NoViableProtocol, SelectionResult, StreamPlan
from streambrain.domain.entities.media_metadata import MediaMetadata
from streambrain.domain.entities.profile import EncodedProfile
from streambrain.domain.enums.delivery_protocol import DeliveryProtocol, PROTOCOL_PRIORITY
from streambrain.domain.ports.compatibility import CompatibilityEvaluatorPort

log = logging.getLogger(__name__)


def index_compatibility_map(entries: Iterable[CompatibilityEntry]) -> Dict[DeliveryProtocol, CompatibilityEntry]:
    """One entry per protocol; on duplicates the first one wins."""
    out: Dict[DeliveryProtocol, CompatibilityEntry] = {}
    for entry in entries:
        proto = DeliveryProtocol(entry.type)
        if proto in out:
            log.warning("Duplicate %s compatibility entry ignored", proto)
            continue
        out[proto] = entry
    return out


class ProtocolSelector:
    """
    Picks how a source gets delivered, in fixed priority order:

      1. DOWNLOAD  - only if the evaluator says the file plays unmodified
      2. DASH      - segmented, per-stream copy/transcode plan
      3. HLS       - same as DASH with the HLS rules

    The first protocol present in the map (and, for DOWNLOAD, playable) wins.
    When none applies a NoViableProtocol result is returned, never raised.
    """

    def __init__(self, evaluator: CompatibilityEvaluatorPort) -> None:
        self.evaluator = evaluator

    def select(
        self,
        meta: MediaMetadata,
        compatibility_map: Iterable[CompatibilityEntry],
        profile: EncodedProfile,
        video_ids: Sequence[int],
        audio_ids: Sequence[int],
    ) -> SelectionResult:
        by_type = index_compatibility_map(compatibility_map)

        for proto in PROTOCOL_PRIORITY:
            entry = by_type.get(proto)
            if entry is None:
                continue

            if proto is DeliveryProtocol.DOWNLOAD:
                verdict = self.evaluator.can_direct_play(meta, entry.rules)
                if verdict.ok:
                    return Decision(
                        protocol=proto,
                        duration=meta.duration,
                        chunk_duration=0,
                        start_chunk_at=0,
                        streams=(),
                    )
                log.debug("Direct play refused: %s", "; ".join(verdict.reasons) or "no reason given")
                continue

            return self._segmented(proto, entry, meta, profile, video_ids, audio_ids)

        log.error("No viable protocol (offered: %s)", ", ".join(p.value for p in by_type) or "none")
        return NoViableProtocol(
            reason="no compatibility entry can deliver this source",
            considered=tuple(p for p in PROTOCOL_PRIORITY if p in by_type),
        )

    def _segmented(
        self,
        proto: DeliveryProtocol,
        entry: CompatibilityEntry,
        meta: MediaMetadata,
        profile: EncodedProfile,
        video_ids: Sequence[int],
        audio_ids: Sequence[int],
    ) -> Decision:
        video_plans: List[StreamPlan] = self.evaluator.plan_video_streams(
            video_ids, meta.video_streams, profile, entry.rules
        )
        # audio is aligned on the first video stream's start
        offset = video_plans[0].start_delay if video_plans else 0.0
        audio_plans: List[StreamPlan] = self.evaluator.plan_audio_streams(
            audio_ids, meta.audio_streams, profile, entry.rules, offset
        )
        return Decision(
            protocol=proto,
            duration=meta.duration,
            chunk_duration=profile.chunk_duration,
            start_chunk_at=0,
            streams=(*video_plans, *audio_plans),
        )
