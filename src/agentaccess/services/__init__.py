"""
Services Module

Stateful services behind the decision engine:
- audit: Append-only decision log
- registry: Agent registry lookup
- rate_limiter: Sliding-window rate limiting over the audit log
- tokens: Grant/denial synthesis and token issuance
"""

from agentaccess.services.audit import AuditRecord, AuditStore, InMemoryAuditStore
from agentaccess.services.registry import AgentRecord, AgentRegistry
from agentaccess.services.rate_limiter import RateLimitUsage, SlidingWindowRateLimiter
from agentaccess.services.tokens import TokenIssuer

__all__ = [
    "AuditRecord",
    "AuditStore",
    "InMemoryAuditStore",
    "AgentRecord",
    "AgentRegistry",
    "RateLimitUsage",
    "SlidingWindowRateLimiter",
    "TokenIssuer",
]
