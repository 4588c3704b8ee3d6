from __future__ import annotations

from typing import Any, List, Protocol, Sequence

from streambrain.domain.entities.compatibility import DirectPlayVerdict
from streambrain.domain.entities.decision import StreamPlan
from streambrain.domain.entities.media_metadata import MediaMetadata, StreamInfo
from streambrain.domain.entities.profile import EncodedProfile


class CompatibilityEvaluatorPort(Protocol):
    def can_direct_play(self, meta: MediaMetadata, rules: Any) -> DirectPlayVerdict: ...

    def plan_video_streams(
        self,
        requested_ids: Sequence[int],
        streams: Sequence[StreamInfo],   # video streams only, in track-id order
        profile: EncodedProfile,
        rules: Any,
    ) -> List[StreamPlan]: ...

    def plan_audio_streams(
        self,
        requested_ids: Sequence[int],
        streams: Sequence[StreamInfo],   # audio streams only, in track-id order
        profile: EncodedProfile,
        rules: Any,
        start_delay: float,              # offset of the first planned video stream
    ) -> List[StreamPlan]: ...
