# streambrain/services/api/deps.py
from __future__ import annotations
from functools import lru_cache

from streambrain.domain.ports.compatibility import CompatibilityEvaluatorPort
from streambrain.domain.ports.probe import MediaProbePort
from streambrain.services.compatibility.rules_evaluator import RuleSetEvaluator
from streambrain.services.probe.ffprobe_adapter import FFprobeAdapter
from streambrain.services.streaming.registry import BrainRegistry


def get_media_probe() -> MediaProbePort:
    """
    Provide a MediaProbePort implementation (ffprobe) via DI.
    Swappable later if you add other probers.
    """
    return FFprobeAdapter()


def get_compatibility_evaluator() -> CompatibilityEvaluatorPort:
    return RuleSetEvaluator()


@lru_cache(maxsize=1)
def get_registry() -> BrainRegistry:
    """
    Process-wide registry; brains (and their analysis) live across requests.
    Override this dependency in tests to inject fake probers.
    """
    return BrainRegistry(probe_factory=get_media_probe, evaluator=get_compatibility_evaluator())
