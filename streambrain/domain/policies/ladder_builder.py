# streambrain/domain/policies/ladder_builder.py
from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from streambrain.common.numbers import round_half_up
from streambrain.domain.entities.media_metadata import Resolution
from streambrain.domain.entities.profile import Profile
from streambrain.domain.policies.quality_tiers import DEFAULT_QUALITY_TIERS, QualityTierTable
from streambrain.domain.policies.resolution_fitter import fit_resolution


def bits_to_kbps(bitrate: Optional[int]) -> int:
    """bits/s -> kbps the way the ladder counts them (1 kbps = 1024 bits/s)."""
    return round_half_up((bitrate or 0) / 1024)


def build_ladder(
    resolution: Resolution,
    bitrate: Optional[int],
    tiers: QualityTierTable = DEFAULT_QUALITY_TIERS,
) -> List[Profile]:
    """
    Build the ordered profile ladder offered for a source.

    Only tiers no larger than the source are kept, each fitted to the source's
    aspect ratio, one profile per tier bitrate. The native resolution is always
    appended as the `original` profile carrying the source bitrate.
    Profiles are sorted by (height, bitrate), stable, and ids are assigned last.
    """
    rungs: List[Profile] = []
    for tier in tiers:
        if tier.width > resolution.width or tier.height > resolution.height:
            continue
        fitted = fit_resolution(resolution.width, resolution.height, tier.width, tier.height)
        for quality_index, kbps in enumerate(tier.bitrates):
            rungs.append(
                Profile(
                    id=-1,
                    height=fitted.height,
                    width=fitted.width,
                    bitrate=kbps,
                    quality_index=quality_index,
                    resized=fitted.resized,
                    original=False,
                )
            )

    rungs.append(
        Profile(
            id=-1,
            height=resolution.height,
            width=resolution.width,
            bitrate=bits_to_kbps(bitrate),
            quality_index=None,
            resized=False,
            original=True,
        )
    )

    # list.sort is stable: equal (height, bitrate) keep tier order
    rungs.sort(key=lambda p: (p.height, p.bitrate))
    return [replace(p, id=i) for i, p in enumerate(rungs)]
