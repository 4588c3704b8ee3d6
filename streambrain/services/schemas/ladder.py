from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, field_validator


class QualityTierSchema(BaseModel):
    height: int = Field(..., gt=0, examples=[720])
    width: int = Field(..., gt=0, examples=[1280])
    bitrates: List[int] = Field(..., min_length=1, description="kbps, lowest quality first",
                                examples=[[2000, 3000, 4000]])

    @field_validator("bitrates")
    @classmethod
    def _positive(cls, v: List[int]) -> List[int]:
        if any(b <= 0 for b in v):
            raise ValueError("bitrates must be > 0")
        return v


class QualityTierTableSchema(BaseModel):
    version: str = Field(..., min_length=1, examples=["1"])
    tiers: List[QualityTierSchema] = Field(..., min_length=1)
