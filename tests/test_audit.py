"""Tests for the audit service."""

import pytest

from agentaccess.constants import OUTCOME_GRANTED
from agentaccess.exceptions import AuditError
from agentaccess.services.audit import AuditRecord, InMemoryAuditStore

from tests.helpers import HOUR_MS, NOW


def _record(request_id, timestamp=NOW, agent="agent-a", resource="code_repository", outcome="granted"):
    return AuditRecord(
        request_id=request_id,
        agent_id=agent,
        resource=resource,
        action="write",
        outcome=outcome,
        timestamp=timestamp,
    )


@pytest.fixture
def store():
    return InMemoryAuditStore()


class TestAppend:
    def test_append_and_get(self, store):
        store.append(_record("req-1"))
        assert len(store) == 1
        assert store.get("req-1").agent_id == "agent-a"
        assert store.get("missing") is None

    def test_duplicate_request_id_rejected(self, store):
        store.append(_record("req-1"))
        with pytest.raises(AuditError):
            store.append(_record("req-1"))
        assert len(store) == 1

    def test_records_are_immutable(self, store):
        record = _record("req-1")
        with pytest.raises(Exception):
            record.outcome = "tampered"


class TestQueryWindow:
    def test_strictly_after_since(self, store):
        store.append(_record("a", timestamp=NOW - 100))
        store.append(_record("b", timestamp=NOW))
        assert store.query_window("agent-a", "code_repository", NOW - 100) == 1
        assert store.query_window("agent-a", "code_repository", NOW - 101) == 2

    def test_out_of_order_appends(self, store):
        store.append(_record("a", timestamp=NOW))
        store.append(_record("b", timestamp=NOW - 2 * HOUR_MS))
        store.append(_record("c", timestamp=NOW - 10))
        assert store.query_window("agent-a", "code_repository", NOW - HOUR_MS) == 2

    def test_unknown_pair(self, store):
        assert store.query_window("nobody", "nothing", 0) == 0

    def test_index_retention(self):
        store = InMemoryAuditStore(index_retention_ms=HOUR_MS)
        store.append(_record("old", timestamp=NOW - 2 * HOUR_MS))
        store.append(_record("new", timestamp=NOW))
        assert store.query_window("agent-a", "code_repository", 0) == 1
        # Retention bounds the index only
        assert len(store) == 2


class TestQuery:
    def test_filters_combine(self, store):
        store.append(_record("1", outcome="granted"))
        store.append(_record("2", outcome="resource_not_accessible"))
        store.append(_record("3", agent="agent-b"))
        store.append(_record("4", resource="data_sources"))

        assert [r.request_id for r in store.query(agent_id="agent-a")] == ["1", "2", "4"]
        assert [r.request_id for r in store.query(outcome="granted", resource="code_repository")] == ["1", "3"]

    def test_since_and_limit(self, store):
        for i in range(5):
            store.append(_record(f"r{i}", timestamp=NOW + i))
        assert [r.request_id for r in store.query(since=NOW + 1)] == ["r2", "r3", "r4"]
        assert [r.request_id for r in store.query(limit=2)] == ["r3", "r4"]


class TestExport:
    def test_export_shape(self, store):
        store.append(_record("req-1"))
        exported = store.export()
        assert exported["recordCount"] == 1
        assert exported["records"][0]["requestId"] == "req-1"
        assert exported["records"][0]["agentId"] == "agent-a"
        assert isinstance(exported["exportedAt"], int)

    def test_cloudevent(self):
        granted = _record("req-1").to_cloudevent()
        assert granted["specversion"] == "1.0"
        assert granted["type"] == "ai.agentaccess.access.granted"
        assert granted["source"] == "agent-a"
        assert granted["time"].startswith("2025-10-09T08:53:20")
        assert granted["data"]["outcome"] == "granted"

        denied = _record("req-2", outcome="task_context_required").to_cloudevent()
        assert denied["type"] == "ai.agentaccess.access.denied"

    def test_cloudevent_type_follows_granted_outcome(self):
        record = _record("req-3", outcome=OUTCOME_GRANTED)
        assert record.to_cloudevent()["type"] == "ai.agentaccess.access.granted"
