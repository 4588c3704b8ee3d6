from streambrain.services.schemas.ladder import (
    QualityTierSchema,
    QualityTierTableSchema,
)
from streambrain.services.schemas.streaming import (
    SourceRequest,
    TrackRead,
    TracksResponse,
    ProfileRead,
    EncodedProfileRead,
    CompatibilityRulesSchema,
    CompatibilityEntrySchema,
    DecisionRequest,
    StreamPlanRead,
    DecisionRead,
)
__all__ = [
    "QualityTierSchema",
    "QualityTierTableSchema",
    "SourceRequest",
    "TrackRead",
    "TracksResponse",
    "ProfileRead",
    "EncodedProfileRead",
    "CompatibilityRulesSchema",
    "CompatibilityEntrySchema",
    "DecisionRequest",
    "StreamPlanRead",
    "DecisionRead",
]
