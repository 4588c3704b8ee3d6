# streambrain/services/api/routers/streaming.py
from __future__ import annotations

from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path

from streambrain.common.logging import get_logger
from streambrain.common.settings import get_settings
from streambrain.domain.errors import AnalysisUnavailable, ProfileNotFound
from streambrain.services.api.deps import get_registry
from streambrain.services.mappers.streaming import (
    to_compatibility_map,
    to_decision_read,
    to_encoded_profile_read,
    to_profiles_read,
    to_tracks_response,
)
from streambrain.services.schemas.streaming import (
    DecisionRead,
    DecisionRequest,
    EncodedProfileRead,
    ProfileRead,
    SourceRequest,
    TracksResponse,
)
from streambrain.services.streaming.registry import BrainRegistry

cfg = get_settings()
logger = get_logger()
router = APIRouter(prefix=f"{cfg.api.prefix}/streaming", tags=["streaming"])


def _unavailable(e: AnalysisUnavailable) -> HTTPException:
    logger.warning("Analysis unavailable: %s", e)
    return HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=str(e))


@router.post("/tracks", response_model=TracksResponse)
async def list_tracks(payload: SourceRequest, registry: BrainRegistry = Depends(get_registry)) -> TracksResponse:
    try:
        listing = await registry.get(payload.source).get_tracks()
    except AnalysisUnavailable as e:
        raise _unavailable(e) from e
    return to_tracks_response(listing)


@router.post("/profiles", response_model=List[ProfileRead])
async def list_profiles(payload: SourceRequest, registry: BrainRegistry = Depends(get_registry)) -> List[ProfileRead]:
    try:
        profiles = await registry.get(payload.source).get_profiles()
    except AnalysisUnavailable as e:
        raise _unavailable(e) from e
    return to_profiles_read(profiles)


@router.post("/profiles/{profile_id}", response_model=EncodedProfileRead)
async def get_profile(
    payload: SourceRequest,
    profile_id: int = Path(..., ge=0),
    registry: BrainRegistry = Depends(get_registry),
) -> EncodedProfileRead:
    try:
        profile = await registry.get(payload.source).get_profile(profile_id)
    except AnalysisUnavailable as e:
        raise _unavailable(e) from e
    except ProfileNotFound as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e)) from e
    return to_encoded_profile_read(profile)


@router.post("/decision", response_model=DecisionRead)
async def take_decision(payload: DecisionRequest, registry: BrainRegistry = Depends(get_registry)) -> DecisionRead:
    brain = registry.get(payload.source)
    try:
        profile = await brain.get_profile(payload.profile_id)
        if payload.chunk_duration is not None:
            profile = profile.with_chunk_duration(payload.chunk_duration)
        result = await brain.take_decision(
            to_compatibility_map(payload.compatibility_map),
            profile,
            payload.video_streams,
            payload.audio_streams,
        )
    except AnalysisUnavailable as e:
        raise _unavailable(e) from e
    except ProfileNotFound as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e)) from e

    if not result.ok:
        raise HTTPException(status_code=HTTPStatus.UNPROCESSABLE_ENTITY, detail=result.reason)
    return to_decision_read(result)
