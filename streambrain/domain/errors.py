# streambrain/domain/errors.py
from __future__ import annotations

from typing import Optional


class StreamBrainError(Exception):
    """Base class for decision-engine failures surfaced to callers."""


class AnalysisUnavailable(StreamBrainError):
    """The media prober failed or produced nothing usable for this source."""

    def __init__(self, source: str, message: str = "analysis unavailable", *, cause: Optional[BaseException] = None):
        super().__init__(f"{message}: {source}")
        self.source = source
        self.message = message
        self.cause = cause


class ProfileNotFound(StreamBrainError):
    """Requested profile id is not part of the ladder built for this source."""

    def __init__(self, profile_id: int, ladder_size: int):
        super().__init__(f"profile {profile_id} not found (ladder has {ladder_size} entries)")
        self.profile_id = profile_id
        self.ladder_size = ladder_size
