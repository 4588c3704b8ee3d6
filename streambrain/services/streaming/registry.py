# streambrain/services/streaming/registry.py
from __future__ import annotations

from collections import OrderedDict
from typing import Callable, Optional

from streambrain.common.settings import get_settings
from streambrain.domain.ports.compatibility import CompatibilityEvaluatorPort
from streambrain.domain.ports.probe import MediaProbePort
from streambrain.services.streaming.brain import StreamingBrain


class BrainRegistry:
    """
    Bounded LRU of StreamingBrain instances keyed by source, so analysis
    survives across requests for the same file.
    """

    def __init__(
        self,
        probe_factory: Callable[[], MediaProbePort],
        evaluator: CompatibilityEvaluatorPort,
        capacity: Optional[int] = None,
    ) -> None:
        self._probe_factory = probe_factory
        self._evaluator = evaluator
        self._capacity = max(1, capacity if capacity is not None else get_settings().analysis.cache_size)
        self._brains: "OrderedDict[str, StreamingBrain]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._brains)

    def __contains__(self, source: str) -> bool:
        return source in self._brains

    def get(self, source: str) -> StreamingBrain:
        brain = self._brains.get(source)
        if brain is not None:
            self._brains.move_to_end(source)
            return brain

        brain = StreamingBrain(source, self._probe_factory(), self._evaluator)
        self._brains[source] = brain
        while len(self._brains) > self._capacity:
            self._brains.popitem(last=False)
        return brain

    def forget(self, source: str) -> None:
        self._brains.pop(source, None)
