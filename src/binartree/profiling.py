"""Opt-in timing of expensive tree operations."""

import time
import functools
from typing import Dict, Callable, Optional
from dataclasses import dataclass
from collections import defaultdict


@dataclass
class MethodMetrics:
    """Call count and accumulated wall time of one tracked operation."""
    call_count: int = 0
    total_time: float = 0.0

    @property
    def avg_time(self) -> float:
        return self.total_time / self.call_count if self.call_count else 0.0


class PerformanceTracker:
    """
    Process-wide timing table keyed by operation name. Nothing is recorded
    until enable() is called.
    """

    _instance = None

    @classmethod
    def get_instance(cls) -> 'PerformanceTracker':
        if cls._instance is None:
            cls._instance = PerformanceTracker()
        return cls._instance

    def __init__(self):
        self.metrics: Dict[str, MethodMetrics] = defaultdict(MethodMetrics)
        self.enabled = False

    def record(self, name: str, elapsed: float) -> None:
        if self.enabled:
            entry = self.metrics[name]
            entry.call_count += 1
            entry.total_time += elapsed

    def reset(self) -> None:
        self.metrics.clear()

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def report(self) -> str:
        """Tabulate the recorded operations, slowest total first."""
        if not self.metrics:
            return "No performance data collected."

        rule = "-" * 72
        lines = [rule, f"{'Operation':<40} {'Calls':>8} {'Total (s)':>11} {'Avg (s)':>11}", rule]
        ranked = sorted(self.metrics.items(), key=lambda kv: kv[1].total_time, reverse=True)
        for name, entry in ranked:
            lines.append(f"{name:<40} {entry.call_count:>8} "
                         f"{entry.total_time:>11.6f} {entry.avg_time:>11.6f}")
        return "\n".join(lines)


def track_performance(method: Optional[Callable] = None, *,
                      tag: Optional[str] = None) -> Callable:
    """
    Time every call of the decorated function while the tracker is enabled.
    Entries are keyed by `tag`, or by the function's qualified name.
    Usable bare or as track_performance(tag=...).
    """
    def decorator(func):
        name = tag or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            tracker = PerformanceTracker.get_instance()
            if not tracker.enabled:
                return func(*args, **kwargs)
            started = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                tracker.record(name, time.perf_counter() - started)
        return wrapper

    if method is None:
        return decorator
    return decorator(method)
