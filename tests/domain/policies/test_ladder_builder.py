# tests/domain/policies/test_ladder_builder.py
from __future__ import annotations

import pytest

from streambrain.domain.entities.media_metadata import Resolution
from streambrain.domain.policies.ladder_builder import bits_to_kbps, build_ladder
from streambrain.domain.policies.quality_tiers import (
    DEFAULT_QUALITY_TIERS,
    QualityTier,
    QualityTierTable,
)


def test_default_table_shape():
    assert len(DEFAULT_QUALITY_TIERS) == 10
    heights = [t.height for t in DEFAULT_QUALITY_TIERS]
    assert heights[0] == 160 and heights[-1] == 4320
    assert heights == sorted(heights)


def test_1080p_ladder_order_and_original_entry():
    ladder = build_ladder(Resolution(1920, 1080), 8_000_000)

    assert [p.id for p in ladder] == list(range(13))
    assert [(p.height, p.bitrate) for p in ladder] == [
        (160, 250), (240, 500), (350, 750), (480, 1250), (576, 1750),
        (720, 2000), (720, 3000), (720, 4000),
        (1080, 7813), (1080, 8000), (1080, 10000), (1080, 12000), (1080, 20000),
    ]

    original = [p for p in ladder if p.original]
    assert len(original) == 1
    assert original[0].id == 8
    assert original[0].bitrate == 7813           # 8000000 / 1024 = 7812.5, rounded half up
    assert original[0].resized is False
    assert original[0].quality_index is None


def test_quality_index_is_position_within_tier():
    ladder = build_ladder(Resolution(1920, 1080), 8_000_000)
    by_rate = {p.bitrate: p for p in ladder if not p.original}
    assert by_rate[2000].quality_index == 0
    assert by_rate[4000].quality_index == 2
    assert by_rate[20000].quality_index == 3
    assert by_rate[250].quality_index == 0


def test_tiers_are_fitted_to_source_ratio():
    ladder = build_ladder(Resolution(1920, 1080), 8_000_000)
    p240 = next(p for p in ladder if p.height == 240)
    assert (p240.width, p240.height, p240.resized) == (426, 240, True)
    p1080 = next(p for p in ladder if p.height == 1080 and not p.original)
    assert (p1080.width, p1080.resized) == (1920, False)


def test_tiny_source_only_has_original():
    ladder = build_ladder(Resolution(176, 144), 64_000)
    assert len(ladder) == 1
    assert ladder[0].original is True
    assert (ladder[0].width, ladder[0].height, ladder[0].id) == (176, 144, 0)
    assert ladder[0].bitrate == 63


def test_tier_wider_than_source_is_skipped():
    # 4:3 1440x1080 cannot hold the 1920 wide 1080p tier
    ladder = build_ladder(Resolution(1440, 1080), 10_000_000)
    assert not any(p.bitrate in (8000, 10000, 12000, 20000) for p in ladder)
    assert max(p.height for p in ladder if not p.original) == 720


def test_missing_bitrate_gives_zero_kbps_original():
    ladder = build_ladder(Resolution(640, 360), None)
    assert next(p for p in ladder if p.original).bitrate == 0
    assert bits_to_kbps(None) == 0


def test_stable_sort_keeps_tier_order_on_ties():
    tiers = QualityTierTable(
        version="test",
        tiers=(
            QualityTier(height=360, width=640, bitrates=(800, 800)),
        ),
    )
    ladder = build_ladder(Resolution(640, 360), 800 * 1024, tiers)
    # three entries at (360, 800): tier index 0, tier index 1, then the original
    assert [(p.quality_index, p.original) for p in ladder] == [(0, False), (1, False), (None, True)]


@pytest.mark.parametrize(
    "w, h, bps",
    [(1920, 1080, 8_000_000), (3840, 2160, 45_000_000), (1280, 534, 2_500_000),
     (720, 1280, 3_000_000), (7680, 4320, 150_000_000), (854, 480, 900_000)],
)
def test_ladder_invariants(w, h, bps):
    ladder = build_ladder(Resolution(w, h), bps)
    assert sum(p.original for p in ladder) == 1
    for p in ladder:
        assert p.width <= w and p.height <= h
    for a, b in zip(ladder, ladder[1:]):
        assert (a.height, a.bitrate) <= (b.height, b.bitrate)


def test_quality_tier_validation():
    with pytest.raises(ValueError):
        QualityTier(height=0, width=100, bitrates=(100,))
    with pytest.raises(ValueError):
        QualityTier(height=100, width=100, bitrates=())
    with pytest.raises(ValueError):
        QualityTierTable(version="", tiers=())
