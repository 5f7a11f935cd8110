#!filepath: logistical/observability/instrumentation.py
from __future__ import annotations

from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Dict, Mapping

from logistical.utils.logger import logs


@dataclass
class FitMetrics:
    """
    Training metrics of the last fit, keyed by name.
    """
    enabled: bool = True
    values: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any):
        if not self.enabled:
            return
        self.values[name] = value
        logs.info(f"[Metric] {name} = {value}")

    def record_all(self, metrics: Mapping[str, Any]):
        for name, value in metrics.items():
            self.record(name, value)


@dataclass
class Instrumentation:
    """
    Timing + metrics for training runs.

    Rules:
    1. timeline only holds leaf timers (record=True)
    2. record=False timers only bound a scope, no side effects
    3. Instrumentation never logs on the hot path
    """

    enabled: bool = True

    def __post_init__(self):
        self.metrics = FitMetrics(enabled=self.enabled)

        # timeline: OrderedDict[leaf_name, elapsed_seconds]
        self.timeline: Dict[str, float] = OrderedDict()

    def timer(self, name: str, *, record: bool = True):
        inst = self

        @contextmanager
        def _ctx():
            if not inst.enabled:
                yield
                return

            start = perf_counter()
            try:
                yield
            finally:
                if record:
                    inst.timeline[name] = perf_counter() - start

        return _ctx()


# -------------------------------------------------------------
# No-op Instrumentation (observability disabled)
# -------------------------------------------------------------
class NoOpInstrumentation:
    """Used when no Instrumentation is injected."""

    def __init__(self):
        self.metrics = FitMetrics(enabled=False)
        self.timeline: Dict[str, float] = {}

    def timer(self, name: str, *, record: bool = True):
        return _NoOpTimer()


class _NoOpTimer:
    def __enter__(self):
        pass

    def __exit__(self, exc_type, exc, tb):
        pass
