# streambrain/services/streaming/brain.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from streambrain.common.logging import get_logger
from streambrain.common.settings import get_settings
from streambrain.domain.dataclasses.tracks import TrackInfo, TrackListing
from streambrain.domain.entities.compatibility import CompatibilityEntry
from streambrain.domain.entities.decision import SelectionResult
from streambrain.domain.entities.media_metadata import MediaMetadata, StreamInfo
from streambrain.domain.entities.profile import EncodedProfile, Profile
from streambrain.domain.errors import AnalysisUnavailable, ProfileNotFound
from streambrain.domain.policies.encoder_params import encode_profile
from streambrain.domain.policies.ladder_builder import build_ladder
from streambrain.domain.policies.protocol_selector import ProtocolSelector
from streambrain.domain.policies.quality_tiers import QualityTierTable
from streambrain.domain.ports.compatibility import CompatibilityEvaluatorPort
from streambrain.domain.ports.probe import MediaProbePort
from streambrain.services.analysis.cache import AnalysisCache
from streambrain.services.ladder.tiers_loader import get_quality_tiers

logger = get_logger()

UNKNOWN_LANGUAGE = "und"


def _track(position: int, s: StreamInfo) -> TrackInfo:
    return TrackInfo(
        id=position,
        language=s.language or UNKNOWN_LANGUAGE,
        codec=s.codec or "unknown",
        codec_name=s.codec_long_name or "Unknown",
    )


class StreamingBrain:
    """
    Entry point for one source: tracks, profile ladder, encoder settings and the
    delivery decision. Every call goes through the analysis cache first, so the
    source is probed once no matter how many questions are asked.
    """

    def __init__(
        self,
        source: str,
        probe: MediaProbePort,
        evaluator: CompatibilityEvaluatorPort,
        *,
        tiers: Optional[QualityTierTable] = None,
        probe_timeout_sec: Optional[float] = None,
        min_video_bitrate: Optional[int] = None,
    ) -> None:
        cfg = get_settings()
        self.source = source
        self.tiers = tiers if tiers is not None else get_quality_tiers()
        self.min_video_bitrate = (
            min_video_bitrate if min_video_bitrate is not None else cfg.ladder.min_video_bitrate_kbps
        )
        self.selector = ProtocolSelector(evaluator)
        self.cache = AnalysisCache(
            source,
            probe,
            timeout_sec=probe_timeout_sec if probe_timeout_sec is not None else cfg.analysis.probe_timeout_sec,
        )

    async def get_meta(self) -> MediaMetadata:
        return await self.cache.ensure_analyzed()

    async def get_tracks(self) -> TrackListing:
        meta = await self.get_meta()
        return TrackListing(
            video=[_track(i, s) for i, s in enumerate(meta.video_streams)],
            audio=[_track(i, s) for i, s in enumerate(meta.audio_streams)],
            subtitle=[],
        )

    async def get_profiles(self) -> List[Profile]:
        meta = await self.get_meta()
        if meta.resolution is None:
            raise AnalysisUnavailable(self.source, "no video resolution to build a ladder from")
        return build_ladder(meta.resolution, meta.bitrate, self.tiers)

    async def get_profile(self, profile_id: int = 0) -> EncodedProfile:
        profiles = await self.get_profiles()
        if not 0 <= profile_id < len(profiles):
            raise ProfileNotFound(profile_id, len(profiles))
        return encode_profile(profiles[profile_id], min_video_bitrate=self.min_video_bitrate)

    async def take_decision(
        self,
        compatibility_map: Iterable[CompatibilityEntry],
        profile: EncodedProfile,
        video_ids: Sequence[int],
        audio_ids: Sequence[int],
    ) -> SelectionResult:
        meta = await self.get_meta()
        result = self.selector.select(meta, compatibility_map, profile, video_ids, audio_ids)
        if result.ok:
            logger.info("Decision for %s: %s (profile %s)", self.source, result.protocol, profile.id)
        return result
