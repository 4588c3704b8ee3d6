# streambrain/services/mappers/streaming.py
from __future__ import annotations

from typing import Iterable, List

from streambrain.domain.dataclasses.tracks import TrackListing
from streambrain.domain.entities.compatibility import CompatibilityEntry, CompatibilityRules
from streambrain.domain.entities.decision import Decision
from streambrain.domain.entities.profile import EncodedProfile, Profile
from streambrain.services.schemas.streaming import (
    CompatibilityEntrySchema,
    CompatibilityRulesSchema,
    DecisionRead,
    EncodedProfileRead,
    ProfileRead,
    StreamPlanRead,
    TrackRead,
    TracksResponse,
)


def to_tracks_response(listing: TrackListing) -> TracksResponse:
    return TracksResponse(
        video=[TrackRead.model_validate(t) for t in listing.video],
        audio=[TrackRead.model_validate(t) for t in listing.audio],
        subtitle=[TrackRead.model_validate(t) for t in listing.subtitle],
    )


def to_profiles_read(profiles: Iterable[Profile]) -> List[ProfileRead]:
    return [ProfileRead.model_validate(p) for p in profiles]


def to_encoded_profile_read(ep: EncodedProfile) -> EncodedProfileRead:
    return EncodedProfileRead(**ep.as_dict())


def to_rules(schema: CompatibilityRulesSchema | None) -> CompatibilityRules | None:
    if schema is None:
        return None
    return CompatibilityRules(
        containers=frozenset(schema.containers),
        video_codecs=frozenset(schema.video_codecs),
        audio_codecs=frozenset(schema.audio_codecs),
        max_width=schema.max_width,
        max_height=schema.max_height,
        max_bitrate_kbps=schema.max_bitrate_kbps,
        max_audio_channels=schema.max_audio_channels,
    )


def to_compatibility_map(entries: Iterable[CompatibilityEntrySchema]) -> List[CompatibilityEntry]:
    return [CompatibilityEntry(type=e.type, rules=to_rules(e.rules)) for e in entries]


def to_decision_read(decision: Decision) -> DecisionRead:
    return DecisionRead(
        protocol=decision.protocol,
        duration=decision.duration,
        chunk_duration=decision.chunk_duration,
        start_chunk_at=decision.start_chunk_at,
        streams=[StreamPlanRead.model_validate(s) for s in decision.streams],
    )
