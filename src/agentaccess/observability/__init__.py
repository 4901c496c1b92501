"""
Observability components for AgentAccess.

Provides Prometheus metrics for access decisions.
"""

from .metrics import DecisionMetrics

__all__ = ["DecisionMetrics"]
