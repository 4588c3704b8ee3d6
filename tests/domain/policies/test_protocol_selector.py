# tests/domain/policies/test_protocol_selector.py
from __future__ import annotations

from typing import Any, List

import pytest

from streambrain.domain.entities.compatibility import CompatibilityEntry, DirectPlayVerdict
from streambrain.domain.entities.decision import Decision, NoViableProtocol, StreamPlan
from streambrain.domain.entities.profile import EncodedProfile, EncoderParams, Profile
from streambrain.domain.enums import CodecType, DeliveryProtocol, StreamAction
from streambrain.domain.policies.protocol_selector import ProtocolSelector, index_compatibility_map


class ScriptedEvaluator:
    """Evaluator double: fixed direct-play answer, records which rules each call got."""

    def __init__(self, direct_play: bool = True, video_delay: float = 0.5) -> None:
        self.direct_play = direct_play
        self.video_delay = video_delay
        self.calls: List[tuple] = []

    def can_direct_play(self, meta, rules: Any) -> DirectPlayVerdict:
        self.calls.append(("direct", rules))
        return DirectPlayVerdict(ok=self.direct_play, reasons=() if self.direct_play else ("nope",))

    def plan_video_streams(self, ids, streams, profile, rules):
        self.calls.append(("video", rules, tuple(ids)))
        return [StreamPlan(CodecType.VIDEO, i, StreamAction.copy, start_delay=self.video_delay) for i in ids]

    def plan_audio_streams(self, ids, streams, profile, rules, start_delay):
        self.calls.append(("audio", rules, tuple(ids), start_delay))
        return [StreamPlan(CodecType.AUDIO, i, StreamAction.transcode, start_delay=start_delay) for i in ids]


@pytest.fixture()
def profile() -> EncodedProfile:
    return EncodedProfile(
        profile=Profile(id=5, height=720, width=1280, bitrate=2000, quality_index=0, resized=True),
        params=EncoderParams(x264subme=0, x264crf=24, x264preset="slow",
                             audio_bitrate=200, video_bitrate=1764, chunk_duration=8),
    )


def _all_three():
    # deliberately not in priority order
    return [
        CompatibilityEntry(DeliveryProtocol.HLS, rules="hls-rules"),
        CompatibilityEntry(DeliveryProtocol.DASH, rules="dash-rules"),
        CompatibilityEntry(DeliveryProtocol.DOWNLOAD, rules="dl-rules"),
    ]


def test_download_wins_when_direct_play_ok(meta_1080p, profile):
    ev = ScriptedEvaluator(direct_play=True)
    result = ProtocolSelector(ev).select(meta_1080p, _all_three(), profile, [0], [0, 1])

    assert isinstance(result, Decision)
    assert result.ok is True
    assert result.protocol is DeliveryProtocol.DOWNLOAD
    assert result.duration == meta_1080p.duration
    assert (result.chunk_duration, result.start_chunk_at, result.streams) == (0, 0, ())
    assert ev.calls == [("direct", "dl-rules")]


def test_dash_when_direct_play_refused(meta_1080p, profile):
    ev = ScriptedEvaluator(direct_play=False, video_delay=0.25)
    result = ProtocolSelector(ev).select(meta_1080p, _all_three(), profile, [0], [1, 0])

    assert result.protocol is DeliveryProtocol.DASH
    assert result.chunk_duration == 8
    assert result.start_chunk_at == 0
    assert [(s.codec_type, s.stream_id) for s in result.streams] == [
        (CodecType.VIDEO, 0), (CodecType.AUDIO, 1), (CodecType.AUDIO, 0),
    ]
    # audio aligned on the first video plan's delay, DASH rules used throughout
    assert ev.calls[1] == ("video", "dash-rules", (0,))
    assert ev.calls[2] == ("audio", "dash-rules", (1, 0), 0.25)


def test_custom_chunk_duration_is_carried(meta_1080p, profile):
    ev = ScriptedEvaluator(direct_play=False)
    entries = [CompatibilityEntry(DeliveryProtocol.DASH)]
    result = ProtocolSelector(ev).select(meta_1080p, entries, profile.with_chunk_duration(4), [0], [0])
    assert result.chunk_duration == 4


def test_dash_without_download_entry_skips_direct_play(meta_1080p, profile):
    ev = ScriptedEvaluator(direct_play=True)
    entries = [CompatibilityEntry(DeliveryProtocol.DASH, rules="dash-rules")]
    result = ProtocolSelector(ev).select(meta_1080p, entries, profile, [0], [0])
    assert result.protocol is DeliveryProtocol.DASH
    assert all(c[0] != "direct" for c in ev.calls)


def test_only_hls_entry_gives_hls(meta_1080p, profile):
    ev = ScriptedEvaluator(direct_play=True)
    entries = [CompatibilityEntry(DeliveryProtocol.HLS, rules="hls-rules")]
    result = ProtocolSelector(ev).select(meta_1080p, entries, profile, [0], [0])
    assert result.protocol is DeliveryProtocol.HLS
    assert result.chunk_duration == 8
    assert ev.calls[0] == ("video", "hls-rules", (0,))


def test_no_video_requested_means_zero_offset(meta_1080p, profile):
    ev = ScriptedEvaluator(direct_play=False)
    entries = [CompatibilityEntry(DeliveryProtocol.HLS)]
    result = ProtocolSelector(ev).select(meta_1080p, entries, profile, [], [0])
    assert [s.codec_type for s in result.streams] == [CodecType.AUDIO]
    assert result.streams[0].start_delay == 0.0


def test_empty_map_is_no_viable_protocol(meta_1080p, profile):
    result = ProtocolSelector(ScriptedEvaluator()).select(meta_1080p, [], profile, [0], [0])
    assert isinstance(result, NoViableProtocol)
    assert result.ok is False
    assert result.considered == ()


def test_download_only_and_refused_is_no_viable_protocol(meta_1080p, profile):
    ev = ScriptedEvaluator(direct_play=False)
    entries = [CompatibilityEntry(DeliveryProtocol.DOWNLOAD)]
    result = ProtocolSelector(ev).select(meta_1080p, entries, profile, [0], [0])
    assert isinstance(result, NoViableProtocol)
    assert result.considered == (DeliveryProtocol.DOWNLOAD,)


def test_duplicate_entries_first_wins():
    entries = [
        CompatibilityEntry(DeliveryProtocol.DASH, rules="first"),
        CompatibilityEntry(DeliveryProtocol.DASH, rules="second"),
        CompatibilityEntry("HLS", rules="hls"),  # plain strings are accepted too
    ]
    by_type = index_compatibility_map(entries)
    assert by_type[DeliveryProtocol.DASH].rules == "first"
    assert by_type[DeliveryProtocol.HLS].rules == "hls"
    assert DeliveryProtocol.DOWNLOAD not in by_type
