"""Tests for the sliding-window rate limiter."""

from agentaccess.constants import DenialReason
from agentaccess.services.audit import AuditRecord, InMemoryAuditStore
from agentaccess.services.rate_limiter import SlidingWindowRateLimiter

from tests.helpers import HOUR_MS, NOW

AGENT = "agent-a"
RESOURCE = "code_repository"


def _fill(store, count, timestamp, agent=AGENT, resource=RESOURCE, prefix="r"):
    for i in range(count):
        store.append(
            AuditRecord(
                request_id=f"{prefix}-{timestamp}-{i}",
                agent_id=agent,
                resource=resource,
                action="read",
                outcome="granted",
                timestamp=timestamp,
            )
        )


# ---------------------------------------------------------------------------
# Window counting
# ---------------------------------------------------------------------------


class TestUsage:
    def test_empty_store(self):
        limiter = SlidingWindowRateLimiter(InMemoryAuditStore())
        usage = limiter.usage(AGENT, RESOURCE, NOW)
        assert usage.requests_this_hour == 0
        assert usage.requests_this_day == 0

    def test_hour_and_day_windows(self):
        store = InMemoryAuditStore()
        _fill(store, 3, NOW - 10)
        _fill(store, 2, NOW - 5 * HOUR_MS)
        limiter = SlidingWindowRateLimiter(store)

        usage = limiter.usage(AGENT, RESOURCE, NOW)
        assert usage.requests_this_hour == 3
        assert usage.requests_this_day == 5

    def test_record_at_cutoff_is_excluded(self):
        store = InMemoryAuditStore()
        _fill(store, 1, NOW - HOUR_MS)
        _fill(store, 1, NOW - HOUR_MS + 1, prefix="s")
        limiter = SlidingWindowRateLimiter(store)
        assert limiter.usage(AGENT, RESOURCE, NOW).requests_this_hour == 1

    def test_pairs_are_independent(self):
        store = InMemoryAuditStore()
        _fill(store, 4, NOW, agent="agent-b")
        _fill(store, 4, NOW, resource="data_sources", prefix="d")
        limiter = SlidingWindowRateLimiter(store)
        assert limiter.usage(AGENT, RESOURCE, NOW).requests_this_hour == 0


# ---------------------------------------------------------------------------
# Limit checks
# ---------------------------------------------------------------------------


class TestCheck:
    def test_under_limit_passes(self):
        store = InMemoryAuditStore()
        _fill(store, 99, NOW)
        limiter = SlidingWindowRateLimiter(store, requests_per_hour=100)
        assert limiter.check(AGENT, RESOURCE, NOW) is None

    def test_reaching_hourly_limit_denies(self):
        store = InMemoryAuditStore()
        _fill(store, 100, NOW)
        limiter = SlidingWindowRateLimiter(store, requests_per_hour=100)
        assert limiter.check(AGENT, RESOURCE, NOW) == DenialReason.HOURLY_RATE_LIMIT_EXCEEDED

    def test_hourly_reported_before_daily(self):
        store = InMemoryAuditStore()
        _fill(store, 10, NOW)
        limiter = SlidingWindowRateLimiter(store, requests_per_hour=10, requests_per_day=10)
        assert limiter.check(AGENT, RESOURCE, NOW) == DenialReason.HOURLY_RATE_LIMIT_EXCEEDED

    def test_daily_limit(self):
        store = InMemoryAuditStore()
        _fill(store, 10, NOW - 3 * HOUR_MS)
        limiter = SlidingWindowRateLimiter(store, requests_per_hour=100, requests_per_day=10)
        assert limiter.check(AGENT, RESOURCE, NOW) == DenialReason.DAILY_RATE_LIMIT_EXCEEDED

    def test_window_slides_past_old_records(self):
        store = InMemoryAuditStore()
        _fill(store, 100, NOW)
        limiter = SlidingWindowRateLimiter(store, requests_per_hour=100)
        assert limiter.check(AGENT, RESOURCE, NOW + HOUR_MS) is None

    def test_custom_window_lengths(self):
        store = InMemoryAuditStore()
        _fill(store, 2, NOW - 2000)
        limiter = SlidingWindowRateLimiter(
            store, requests_per_hour=2, hour_window_ms=1000, day_window_ms=10_000
        )
        assert limiter.check(AGENT, RESOURCE, NOW) is None
        assert limiter.usage(AGENT, RESOURCE, NOW).requests_this_day == 2
