# streambrain/domain/policies/quality_tiers.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class QualityTier:
    height: int
    width: int
    bitrates: Tuple[int, ...]   # kbps, lowest quality index first

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError("QualityTier dimensions must be > 0")
        if not self.bitrates:
            raise ValueError("QualityTier needs at least one bitrate")
        if any(b <= 0 for b in self.bitrates):
            raise ValueError("QualityTier bitrates must be > 0")


@dataclass(frozen=True)
class QualityTierTable:
    """Versioned ladder configuration. Bump `version` whenever tiers change."""
    version: str
    tiers: Tuple[QualityTier, ...]

    def __post_init__(self):
        if not self.version:
            raise ValueError("QualityTierTable.version is required")

    def __iter__(self):
        return iter(self.tiers)

    def __len__(self) -> int:
        return len(self.tiers)


DEFAULT_QUALITY_TIERS = QualityTierTable(
    version="1",
    tiers=(
        QualityTier(height=160, width=285, bitrates=(250,)),
        QualityTier(height=240, width=430, bitrates=(500,)),
        QualityTier(height=350, width=625, bitrates=(750,)),
        QualityTier(height=480, width=855, bitrates=(1250,)),
        QualityTier(height=576, width=1024, bitrates=(1750,)),
        QualityTier(height=720, width=1280, bitrates=(2000, 3000, 4000)),
        QualityTier(height=1080, width=1920, bitrates=(8000, 10000, 12000, 20000)),
        QualityTier(height=1440, width=2560, bitrates=(22000, 30000)),
        QualityTier(height=2160, width=3840, bitrates=(50000, 60000, 70000, 80000)),
        QualityTier(height=4320, width=7680, bitrates=(140000,)),
    ),
)
