# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Prometheus Metrics Integration.

Exposes metrics:
- agentaccess_decisions_total{outcome="granted|<reason>"}
- agentaccess_evaluation_duration_seconds
- agentaccess_audit_records_total
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


class DecisionMetrics:
    """
    Prometheus metrics for the decision engine.

    Each instance registers on its own ``CollectorRegistry`` unless one is
    passed in, so several engines can coexist in one process.

    Args:
        registry: Registry to register collectors on.
        prefix: Metric name prefix.
    """

    def __init__(
        self,
        registry: Optional[CollectorRegistry] = None,
        prefix: str = "agentaccess",
    ) -> None:
        self.registry = registry if registry is not None else CollectorRegistry()
        self._decisions_sample = f"{prefix}_decisions_total"

        self.decisions_total = Counter(
            f"{prefix}_decisions_total",
            "Access decisions by outcome",
            ["outcome"],
            registry=self.registry,
        )
        self.evaluation_duration = Histogram(
            f"{prefix}_evaluation_duration_seconds",
            "Time spent evaluating one access request",
            registry=self.registry,
            buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.5),
        )
        self.audit_records_total = Counter(
            f"{prefix}_audit_records_total",
            "Audit records appended",
            registry=self.registry,
        )

    def record_decision(self, outcome: str, duration_seconds: float) -> None:
        """Record one completed evaluation."""
        self.decisions_total.labels(outcome=outcome).inc()
        self.evaluation_duration.observe(duration_seconds)

    def record_audit_append(self) -> None:
        self.audit_records_total.inc()

    def decision_count(self, outcome: str) -> float:
        """Current counter value for an outcome (0 if never seen)."""
        value = self.registry.get_sample_value(
            self._decisions_sample, {"outcome": outcome}
        )
        return value or 0.0

    def render(self) -> bytes:
        """Prometheus text exposition for this registry."""
        return generate_latest(self.registry)
