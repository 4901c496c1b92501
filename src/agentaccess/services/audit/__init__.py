# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Audit Service

Append-only record of every access decision. The record log is also the
backing store for sliding-window rate limiting: ``query_window`` counts
recent decisions per (agent, resource) pair.
"""

from __future__ import annotations

import bisect
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ConfigDict

from agentaccess.constants import OUTCOME_GRANTED
from agentaccess.exceptions import AuditError
from agentaccess.schema import WireModel, now_ms


class AuditRecord(WireModel):
    """One evaluated request. ``outcome`` is ``granted`` or a denial reason code."""

    model_config = ConfigDict(frozen=True)

    request_id: str
    agent_id: str
    resource: str
    action: str
    outcome: str
    timestamp: int

    def to_cloudevent(self) -> dict[str, Any]:
        """Serialize as a CloudEvents v1.0 JSON envelope."""
        granted = self.outcome == OUTCOME_GRANTED
        return {
            "specversion": "1.0",
            "id": f"audit_{uuid.uuid4().hex[:16]}",
            "type": "ai.agentaccess.access.granted" if granted else "ai.agentaccess.access.denied",
            "source": self.agent_id,
            "time": datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc).isoformat(),
            "datacontenttype": "application/json",
            "data": self.to_wire(),
        }


class AuditStore(ABC):
    """
    Audit sink contract.

    Implementations must make ``append`` and ``query_window`` consistent with
    each other: a count taken after ``append`` returns must include the record.
    """

    # How far back ``query_window`` can count (ms); None means unbounded
    index_retention_ms: Optional[int] = None

    @abstractmethod
    def append(self, record: AuditRecord) -> None:
        """Append a record. Records are never modified or removed by callers."""

    @abstractmethod
    def query_window(self, agent_id: str, resource: str, since: int) -> int:
        """Count records for the pair with ``timestamp`` strictly after ``since``."""

    @abstractmethod
    def query(
        self,
        agent_id: Optional[str] = None,
        resource: Optional[str] = None,
        outcome: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[AuditRecord]:
        """Filter records (AND logic), oldest first."""

    @abstractmethod
    def __len__(self) -> int:
        ...

    def export(self) -> dict[str, Any]:
        """Export all records for external storage or review."""
        records = self.query()
        return {
            "exportedAt": now_ms(),
            "recordCount": len(records),
            "records": [r.to_wire() for r in records],
        }


class InMemoryAuditStore(AuditStore):
    """
    Audit store held in process memory.

    Keeps a sorted timestamp index per (agent, resource) pair so window
    counts are two binary searches. ``index_retention_ms`` bounds the index
    (not the record list); window queries older than the retention are not
    supported when it is set, so it must cover the longest rate-limit window.
    """

    def __init__(self, index_retention_ms: Optional[int] = None):
        self._records: list[AuditRecord] = []
        self._by_request: dict[str, AuditRecord] = {}
        self._index: dict[tuple[str, str], list[int]] = {}
        self.index_retention_ms = index_retention_ms
        self._lock = threading.Lock()

    def append(self, record: AuditRecord) -> None:
        key = (record.agent_id, record.resource)
        with self._lock:
            if record.request_id in self._by_request:
                raise AuditError(f"Duplicate audit record for request {record.request_id}")
            self._records.append(record)
            self._by_request[record.request_id] = record
            stamps = self._index.setdefault(key, [])
            if not stamps or record.timestamp >= stamps[-1]:
                stamps.append(record.timestamp)
            else:
                bisect.insort(stamps, record.timestamp)

            if self.index_retention_ms is not None:
                cutoff = stamps[-1] - self.index_retention_ms
                expired = bisect.bisect_right(stamps, cutoff)
                if expired:
                    del stamps[:expired]

    def query_window(self, agent_id: str, resource: str, since: int) -> int:
        with self._lock:
            stamps = self._index.get((agent_id, resource))
            if not stamps:
                return 0
            return len(stamps) - bisect.bisect_right(stamps, since)

    def query(
        self,
        agent_id: Optional[str] = None,
        resource: Optional[str] = None,
        outcome: Optional[str] = None,
        since: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[AuditRecord]:
        with self._lock:
            results = list(self._records)

        if agent_id:
            results = [r for r in results if r.agent_id == agent_id]
        if resource:
            results = [r for r in results if r.resource == resource]
        if outcome:
            results = [r for r in results if r.outcome == outcome]
        if since is not None:
            results = [r for r in results if r.timestamp > since]

        if limit is not None:
            results = results[max(len(results) - limit, 0):]
        return results

    def get(self, request_id: str) -> Optional[AuditRecord]:
        """Find the record for a request id."""
        return self._by_request.get(request_id)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["AuditRecord", "AuditStore", "InMemoryAuditStore"]
