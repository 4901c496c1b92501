# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Agent Registry Service

Lookup of agent existence, role and activity status.
"""

from .agent_registry import AgentRecord, AgentRegistry, lookup_agent

__all__ = [
    "AgentRecord",
    "AgentRegistry",
    "lookup_agent",
]
