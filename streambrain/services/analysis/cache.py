# streambrain/services/analysis/cache.py
from __future__ import annotations

import asyncio
from typing import Optional

from streambrain.common.logging import get_logger
from streambrain.domain.entities.media_metadata import MediaMetadata
from streambrain.domain.errors import AnalysisUnavailable
from streambrain.domain.ports.probe import MediaProbePort

logger = get_logger()


class AnalysisCache:
    """
    Probes one source at most once and keeps the resulting snapshot.

    Concurrent callers share a single in-flight probe task. A caller being
    cancelled does not cancel the probe for the others (the task is shielded).
    Failures and empty results leave the cache unpopulated, so the next call
    probes again; retrying is up to the caller.
    """

    def __init__(self, source: str, probe: MediaProbePort, *, timeout_sec: Optional[float] = None) -> None:
        self.source = source
        self._probe = probe
        self._timeout_sec = timeout_sec
        self._meta: Optional[MediaMetadata] = None
        self._inflight: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()
        self.probe_count = 0

    @property
    def cached(self) -> Optional[MediaMetadata]:
        return self._meta

    def invalidate(self) -> None:
        self._meta = None

    async def ensure_analyzed(self) -> MediaMetadata:
        if self._meta is not None:
            return self._meta

        async with self._lock:
            if self._meta is not None:
                return self._meta
            if self._inflight is None:
                self._inflight = asyncio.ensure_future(self._run_probe())
                self._inflight.add_done_callback(_retrieve_exception)
            task = self._inflight

        return await asyncio.shield(task)

    async def _run_probe(self) -> MediaMetadata:
        self.probe_count += 1
        logger.debug("Probing %s", self.source)
        try:
            try:
                meta = await asyncio.wait_for(self._probe.probe(self.source), timeout=self._timeout_sec)
            except asyncio.TimeoutError as e:
                raise AnalysisUnavailable(self.source, f"probe timed out after {self._timeout_sec}s", cause=e) from e
            except AnalysisUnavailable:
                raise
            except Exception as e:
                raise AnalysisUnavailable(self.source, f"probe failed ({e})", cause=e) from e

            if not meta or meta.is_empty:
                raise AnalysisUnavailable(self.source, "probe returned no usable metadata")

            self._meta = meta
            logger.info("Analyzed %s: %d streams, %s", self.source, len(meta.streams), meta.resolution)
            return meta
        finally:
            self._inflight = None


def _retrieve_exception(task: asyncio.Task) -> None:
    # Every waiter may have been cancelled; mark the outcome as seen.
    if not task.cancelled():
        task.exception()
