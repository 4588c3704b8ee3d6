# tests/conftest.py
from __future__ import annotations

import asyncio
import copy
from typing import Any, Dict, Optional

import pytest

from streambrain.common.probe.ffprobe_helpers import parse_ffprobe
from streambrain.domain.entities.media_metadata import MediaMetadata
from streambrain.domain.policies.quality_tiers import DEFAULT_QUALITY_TIERS
from streambrain.services.compatibility.rules_evaluator import RuleSetEvaluator
from streambrain.services.streaming.brain import StreamingBrain

# 1080p h264/aac mp4 at 8 Mbit/s with two audio tracks
FFPROBE_1080P: Dict[str, Any] = {
    "format": {
        "duration": "5400.250",
        "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
        "bit_rate": "8000000",
        "size": "5400250000",
    },
    "streams": [
        {
            "index": 0,
            "codec_type": "video",
            "codec_name": "h264",
            "codec_long_name": "H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10",
            "width": 1920,
            "height": 1080,
            "bit_rate": "7400000",
            "start_time": "0.041708",
            "disposition": {"default": 1},
            "tags": {"language": "eng"},
        },
        {
            "index": 1,
            "codec_type": "audio",
            "codec_name": "aac",
            "codec_long_name": "AAC (Advanced Audio Coding)",
            "channels": 2,
            "bit_rate": "192000",
            "start_time": "0.000000",
            "tags": {"language": "eng"},
        },
        {
            "index": 2,
            "codec_type": "audio",
            "codec_name": "ac3",
            "codec_long_name": "ATSC A/52A (AC-3)",
            "channels": 6,
            "bit_rate": "384000",
            "start_time": "0.000000",
            "tags": {"language": "fre"},
        },
        {
            "index": 3,
            "codec_type": "subtitle",
            "codec_name": "mov_text",
            "tags": {"language": "eng"},
        },
    ],
}


class FakeProbe:
    """MediaProbePort double: counts calls, can delay, fail, or return nothing."""

    def __init__(
        self,
        result: Optional[MediaMetadata] = None,
        *,
        error: Optional[BaseException] = None,
        delay: float = 0.0,
    ) -> None:
        self.result = result
        self.error = error
        self.delay = delay
        self.calls: list[str] = []

    async def probe(self, source: str) -> Optional[MediaMetadata]:
        self.calls.append(source)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture()
def ffprobe_json() -> Dict[str, Any]:
    return copy.deepcopy(FFPROBE_1080P)


@pytest.fixture()
def meta_1080p(ffprobe_json) -> MediaMetadata:
    return parse_ffprobe(ffprobe_json)


@pytest.fixture()
def fake_probe(meta_1080p) -> FakeProbe:
    return FakeProbe(meta_1080p)


@pytest.fixture()
def evaluator() -> RuleSetEvaluator:
    return RuleSetEvaluator()


@pytest.fixture()
def brain(fake_probe, evaluator) -> StreamingBrain:
    return StreamingBrain(
        "/media/movie.mp4",
        fake_probe,
        evaluator,
        tiers=DEFAULT_QUALITY_TIERS,
        probe_timeout_sec=5,
    )


@pytest.fixture()
def probe_cls():
    """The FakeProbe class itself, for tests that need custom behavior."""
    return FakeProbe
