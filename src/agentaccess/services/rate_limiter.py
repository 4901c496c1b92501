# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Rate Limiter Service

Sliding-window rate limiting per (agent, resource) pair with hourly and
daily ceilings. Counts are recomputed from the audit store on every check;
no separate counter state is kept.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from agentaccess.constants import (
    DAY_MS,
    DEFAULT_REQUESTS_PER_DAY,
    DEFAULT_REQUESTS_PER_HOUR,
    HOUR_MS,
    DenialReason,
)
from agentaccess.services.audit import AuditStore

logger = logging.getLogger(__name__)


class RateLimitUsage(BaseModel):
    """Recent evaluations for one (agent, resource) pair."""

    requests_this_hour: int
    requests_this_day: int


class SlidingWindowRateLimiter:
    """Hourly and daily sliding-window limiter backed by an ``AuditStore``.

    Args:
        store: Audit store whose records are counted.
        requests_per_hour: Hourly ceiling; the check fails once reached.
        requests_per_day: Daily ceiling; the check fails once reached.
        hour_window_ms: Length of the short window.
        day_window_ms: Length of the long window.
    """

    def __init__(
        self,
        store: AuditStore,
        requests_per_hour: int = DEFAULT_REQUESTS_PER_HOUR,
        requests_per_day: int = DEFAULT_REQUESTS_PER_DAY,
        hour_window_ms: int = HOUR_MS,
        day_window_ms: int = DAY_MS,
    ) -> None:
        self._store = store
        self.requests_per_hour = requests_per_hour
        self.requests_per_day = requests_per_day
        self._hour_window_ms = hour_window_ms
        self._day_window_ms = day_window_ms

    def usage(self, agent_id: str, resource: str, now: int) -> RateLimitUsage:
        """Count evaluations newer than ``now - window`` for both windows."""
        return RateLimitUsage(
            requests_this_hour=self._store.query_window(
                agent_id, resource, now - self._hour_window_ms
            ),
            requests_this_day=self._store.query_window(
                agent_id, resource, now - self._day_window_ms
            ),
        )

    def check(self, agent_id: str, resource: str, now: int) -> Optional[DenialReason]:
        """Return a rate-limit denial when a ceiling has been reached."""
        usage = self.usage(agent_id, resource, now)

        if usage.requests_this_hour >= self.requests_per_hour:
            logger.info(
                "Hourly limit reached for %s on %s (%d/%d)",
                agent_id, resource, usage.requests_this_hour, self.requests_per_hour,
            )
            return DenialReason.HOURLY_RATE_LIMIT_EXCEEDED

        if usage.requests_this_day >= self.requests_per_day:
            logger.info(
                "Daily limit reached for %s on %s (%d/%d)",
                agent_id, resource, usage.requests_this_day, self.requests_per_day,
            )
            return DenialReason.DAILY_RATE_LIMIT_EXCEEDED

        return None
