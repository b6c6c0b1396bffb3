"""Stage timing for the detectors."""

from contextlib import contextmanager
from time import perf_counter
from typing import Dict


class PerformanceMetrics:
    """Track how long each named stage of a detection call takes."""

    def __init__(self):
        self.start_times = {}
        self.durations = {}

    def start_timer(self, name: str):
        """Start timing a stage."""
        self.start_times[name] = perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (perf_counter() - self.start_times.pop(name)) * 1000
        self.durations[name] = self.durations.get(name, 0.0) + duration
        return duration

    @contextmanager
    def timer(self, name: str):
        """Time the body of a ``with`` block as stage ``name``."""
        self.start_timer(name)
        try:
            yield
        finally:
            self.stop_timer(name)

    def get_summary(self) -> Dict[str, float]:
        """Accumulated milliseconds per stage, rounded to 0.01 ms."""
        return {name: round(ms, 2) for name, ms in self.durations.items()}
