# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Agent Registry Service

Read-side lookup of agent existence and activity status. Stores:
- Agent identifiers and roles
- Capabilities and lifecycle state
- Activity status and reputation
"""

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field, ValidationError

from agentaccess.constants import DenialReason
from agentaccess.exceptions import RegistryError
from agentaccess.identity.credentials import AgentState
from agentaccess.schema import WireModel

logger = logging.getLogger(__name__)

STATUS_ACTIVE = "active"


class AgentRecord(WireModel):
    """Entry in the agent registry."""

    id: str
    role: str
    capabilities: list[str] = Field(default_factory=list)
    current_state: AgentState = AgentState.IDLE

    # Only "active" agents may be granted access
    status: str = STATUS_ACTIVE
    last_activity: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reputation: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def is_active(self) -> bool:
        return self.status == STATUS_ACTIVE


class AgentRegistry:
    """
    In-memory agent registry.

    The decision engine only calls ``lookup``; the remaining methods are
    for operators and tests.
    """

    def __init__(self, records: Optional[list[AgentRecord]] = None):
        self._agents: dict[str, AgentRecord] = {}
        self._lock = threading.Lock()
        for record in records or []:
            self.register(record)

    def register(self, record: AgentRecord) -> None:
        """
        Register a new agent.

        Raises:
            RegistryError: If the agent id is already registered
        """
        with self._lock:
            if record.id in self._agents:
                raise RegistryError(f"Agent {record.id} is already registered")
            self._agents[record.id] = record
        logger.info("Registered agent %s with role %s", record.id, record.role)

    def lookup(self, agent_id: str) -> Optional[AgentRecord]:
        """Get an agent by id, or ``None`` if unknown."""
        return self._agents.get(agent_id)

    def update_status(self, agent_id: str, status: str) -> None:
        """
        Change an agent's activity status.

        Raises:
            RegistryError: If the agent is not registered
        """
        with self._lock:
            record = self._agents.get(agent_id)
            if record is None:
                raise RegistryError(f"Agent {agent_id} not found")
            self._agents[agent_id] = record.model_copy(update={"status": status})
        logger.info("Agent %s status set to %s", agent_id, status)

    def record_activity(self, agent_id: str, when: Optional[datetime] = None) -> None:
        """Record that an agent was seen."""
        with self._lock:
            record = self._agents.get(agent_id)
            if record:
                self._agents[agent_id] = record.model_copy(
                    update={"last_activity": when or datetime.now(timezone.utc)}
                )

    def list_agents(self, status: Optional[str] = None) -> list[AgentRecord]:
        """List agents, optionally filtered by status."""
        agents = list(self._agents.values())
        if status:
            agents = [a for a in agents if a.status == status]
        return agents

    def __len__(self) -> int:
        return len(self._agents)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AgentRegistry":
        """Load a registry from a YAML file with a top-level ``agents`` list."""
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise RegistryError(f"Could not load agent registry from {path}: {exc}") from exc

        if not isinstance(data, dict):
            raise RegistryError(f"Agent registry {path} must be a mapping with an 'agents' list")
        agents = data.get("agents") or []
        if not isinstance(agents, list):
            raise RegistryError(f"'agents' in {path} must be a list")

        try:
            records = [AgentRecord.model_validate(item) for item in agents]
        except ValidationError as exc:
            raise RegistryError(f"Invalid agent entry in {path}: {exc}") from exc
        return cls(records)


def lookup_agent(
    registry: AgentRegistry,
    agent_id: str,
) -> tuple[Optional[AgentRecord], Optional[DenialReason]]:
    """Resolve an agent that exists and is active."""
    record = registry.lookup(agent_id)
    if record is None or not record.is_active:
        return None, DenialReason.AGENT_NOT_FOUND_OR_INACTIVE
    return record, None
