from __future__ import annotations
from enum import StrEnum


class DeliveryProtocol(StrEnum):
    DOWNLOAD = "DOWNLOAD"
    DASH = "DASH"
    HLS = "HLS"


# Selection order, highest priority first. Input order of a compatibility map never matters.
PROTOCOL_PRIORITY: tuple[DeliveryProtocol, ...] = (
    DeliveryProtocol.DOWNLOAD,
    DeliveryProtocol.DASH,
    DeliveryProtocol.HLS,
)
