from __future__ import annotations

import statistics
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Deque, Dict, Optional

# Latency samples kept for avg/p95; counters are not capped
MAX_LATENCY_SAMPLES = 1000


@dataclass
class Metrics:
    """Simple in-memory counters for calls to the inference API."""
    total_requests: int = 0
    success_requests: int = 0
    failed_requests: int = 0
    latencies_ms: Deque[float] = field(default_factory=lambda: deque(maxlen=MAX_LATENCY_SAMPLES))
    last_latency_ms: Optional[float] = None
    requests_by_model: Dict[str, int] = field(default_factory=dict)

    def record(self, model: str, ok: bool, latency_ms: float) -> None:
        self.total_requests += 1
        if ok:
            self.success_requests += 1
        else:
            self.failed_requests += 1
        self.requests_by_model[model] = self.requests_by_model.get(model, 0) + 1
        self.last_latency_ms = latency_ms
        self.latencies_ms.append(latency_ms)

    def snapshot(self) -> Dict[str, Any]:
        avg = statistics.mean(self.latencies_ms) if self.latencies_ms else None
        p95 = None
        if len(self.latencies_ms) >= 20:
            xs = sorted(self.latencies_ms)
            p95 = xs[int(0.95 * (len(xs) - 1))]
        return {
            "total_requests": self.total_requests,
            "success_requests": self.success_requests,
            "failed_requests": self.failed_requests,
            "requests_by_model": dict(self.requests_by_model),
            "last_latency_ms": self.last_latency_ms,
            "avg_latency_ms": avg,
            "p95_latency_ms": p95,
        }
