# streambrain/services/ladder/tiers_loader.py
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from streambrain.common.logging import get_logger
from streambrain.common.settings import get_settings
from streambrain.domain.policies.quality_tiers import DEFAULT_QUALITY_TIERS, QualityTier, QualityTierTable
from streambrain.services.schemas.ladder import QualityTierTableSchema

logger = get_logger()


def load_quality_tiers(path: Optional[Path]) -> QualityTierTable:
    """
    Read a quality tier table from JSON:
        {"version": "2", "tiers": [{"height": 720, "width": 1280, "bitrates": [2000, 3000]}, ...]}
    Without a path the built-in table is returned. Invalid files raise (pydantic ValidationError / OSError).
    """
    if path is None:
        return DEFAULT_QUALITY_TIERS

    raw = Path(path).read_text(encoding="utf-8")
    doc = QualityTierTableSchema.model_validate_json(raw)
    table = QualityTierTable(
        version=doc.version,
        tiers=tuple(QualityTier(height=t.height, width=t.width, bitrates=tuple(t.bitrates)) for t in doc.tiers),
    )
    logger.info("Loaded quality tiers v%s (%d tiers) from %s", table.version, len(table), path)
    return table


@lru_cache(maxsize=1)
def get_quality_tiers() -> QualityTierTable:
    return load_quality_tiers(get_settings().ladder.tiers_file)
