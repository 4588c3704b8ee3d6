from __future__ import annotations
from typing import Optional, Protocol
from streambrain.domain.entities.media_metadata import MediaMetadata

class MediaProbePort(Protocol):
    async def probe(self, source: str) -> Optional[MediaMetadata]: ...
