# streambrain/services/compatibility/rules_evaluator.py
from __future__ import annotations

from typing import AbstractSet, List, Optional, Sequence

from streambrain.common.logging import get_logger
from streambrain.domain.entities.compatibility import CompatibilityRules, DirectPlayVerdict
from streambrain.domain.entities.decision import StreamPlan
from streambrain.domain.entities.media_metadata import MediaMetadata, StreamInfo
from streambrain.domain.entities.profile import EncodedProfile
from streambrain.domain.enums.codec_type import CodecType
from streambrain.domain.enums.stream_action import StreamAction
from streambrain.domain.policies.ladder_builder import bits_to_kbps
from streambrain.domain.ports.compatibility import CompatibilityEvaluatorPort

logger = get_logger()

# What the encoder produces when a stream cannot be copied.
TRANSCODE_VIDEO_CODEC = "h264"
TRANSCODE_AUDIO_CODEC = "aac"

_PERMISSIVE = CompatibilityRules()


def _allowed(value: Optional[str], allowed: AbstractSet[str]) -> bool:
    if not allowed:
        return True
    return (value or "").lower() in allowed


def _container_allowed(container: Optional[str], allowed: AbstractSet[str]) -> bool:
    # ffprobe reports families like "mov,mp4,m4a,3gp,3g2,mj2"
    if not allowed:
        return True
    names = {n.strip().lower() for n in (container or "").split(",") if n.strip()}
    return bool(names & allowed)


def _over(value: Optional[int], limit: Optional[int]) -> bool:
    return limit is not None and value is not None and value > limit


class RuleSetEvaluator(CompatibilityEvaluatorPort):
    """
    Compatibility evaluator over `CompatibilityRules`.
    A missing rule set (None) accepts everything.
    """

    # ---- direct play ---------------------------------------------------------
    def can_direct_play(self, meta: MediaMetadata, rules: Optional[CompatibilityRules]) -> DirectPlayVerdict:
        rules = rules or _PERMISSIVE
        reasons: List[str] = []

        if not _container_allowed(meta.container, rules.containers):
            reasons.append(f"container={meta.container}")
        for s in meta.video_streams:
            if not _allowed(s.codec, rules.video_codecs):
                reasons.append(f"video codec={s.codec}")
        for s in meta.audio_streams:
            if not _allowed(s.codec, rules.audio_codecs):
                reasons.append(f"audio codec={s.codec}")
            if _over(s.channels, rules.max_audio_channels):
                reasons.append(f"audio channels={s.channels}")
        if meta.resolution is not None:
            if _over(meta.resolution.width, rules.max_width):
                reasons.append(f"width={meta.resolution.width}")
            if _over(meta.resolution.height, rules.max_height):
                reasons.append(f"height={meta.resolution.height}")
        if meta.bitrate is not None and _over(bits_to_kbps(meta.bitrate), rules.max_bitrate_kbps):
            reasons.append(f"bitrate={bits_to_kbps(meta.bitrate)}kbps")

        return DirectPlayVerdict(ok=not reasons, reasons=tuple(reasons))

    # ---- per-stream plans ----------------------------------------------------
    def plan_video_streams(
        self,
        requested_ids: Sequence[int],
        streams: Sequence[StreamInfo],
        profile: EncodedProfile,
        rules: Optional[CompatibilityRules],
    ) -> List[StreamPlan]:
        rules = rules or _PERMISSIVE
        plans: List[StreamPlan] = []
        for sid, s in self._select(requested_ids, streams, CodecType.VIDEO):
            fits_profile = (s.width or 0) <= profile.width and (s.height or 0) <= profile.height
            rate_ok = s.bitrate is None or bits_to_kbps(s.bitrate) <= profile.bitrate
            within_rules = not (_over(s.width, rules.max_width) or _over(s.height, rules.max_height))

            if _allowed(s.codec, rules.video_codecs) and fits_profile and rate_ok and within_rules:
                plans.append(StreamPlan(
                    codec_type=CodecType.VIDEO,
                    stream_id=sid,
                    action=StreamAction.copy,
                    codec=s.codec,
                    start_delay=s.start_time,
                    width=s.width,
                    height=s.height,
                ))
            else:
                plans.append(StreamPlan(
                    codec_type=CodecType.VIDEO,
                    stream_id=sid,
                    action=StreamAction.transcode,
                    codec=TRANSCODE_VIDEO_CODEC,
                    start_delay=s.start_time,
                    bitrate=profile.params.video_bitrate,
                    width=profile.width,
                    height=profile.height,
                ))
        return plans

    def plan_audio_streams(
        self,
        requested_ids: Sequence[int],
        streams: Sequence[StreamInfo],
        profile: EncodedProfile,
        rules: Optional[CompatibilityRules],
        start_delay: float,
    ) -> List[StreamPlan]:
        rules = rules or _PERMISSIVE
        plans: List[StreamPlan] = []
        for sid, s in self._select(requested_ids, streams, CodecType.AUDIO):
            if _allowed(s.codec, rules.audio_codecs) and not _over(s.channels, rules.max_audio_channels):
                plans.append(StreamPlan(
                    codec_type=CodecType.AUDIO,
                    stream_id=sid,
                    action=StreamAction.copy,
                    codec=s.codec,
                    start_delay=start_delay,
                ))
            else:
                plans.append(StreamPlan(
                    codec_type=CodecType.AUDIO,
                    stream_id=sid,
                    action=StreamAction.transcode,
                    codec=TRANSCODE_AUDIO_CODEC,
                    start_delay=start_delay,
                    bitrate=profile.params.audio_bitrate,
                ))
        return plans

    @staticmethod
    def _select(requested_ids: Sequence[int], streams: Sequence[StreamInfo], kind: CodecType):
        for sid in requested_ids:
            if not 0 <= sid < len(streams):
                logger.warning("Unknown %s stream id %s (have %d), skipped", kind, sid, len(streams))
                continue
            yield sid, streams[sid]
