"""In-memory telemetry backend for testing and the console runtime."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field


@dataclass
class InMemoryTelemetry:
    """Keeps labelled counters in memory for inspection."""

    counters: Counter[str] = field(default_factory=Counter)

    def incr(self, name: str, value: int = 1, labels: tuple[tuple[str, str], ...] = ()) -> None:
        """Increase a named counter."""
        self.counters[self._make_key(name, labels)] += value

    def _make_key(self, name: str, labels: tuple[tuple[str, str], ...] | None) -> str:
        """Create a unique key for a metric with labels."""
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in labels)
        return f"{name}{{{label_str}}}"

    # ── Test helpers ─────────────────────────────────────────────────────

    def get_counter(self, name: str, labels: tuple[tuple[str, str], ...] = ()) -> int:
        """Get counter value for testing."""
        return int(self.counters[self._make_key(name, labels)])

    def total(self, name: str) -> int:
        """Sum of a counter across all label sets."""
        prefix = f"{name}{{"
        return sum(v for k, v in self.counters.items() if k == name or k.startswith(prefix))

    def reset(self) -> None:
        """Clear all metrics."""
        self.counters.clear()
