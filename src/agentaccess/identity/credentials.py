# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Agent Credentials

Inbound credential shape and the structural checks run before any
registry or policy lookup. Cryptographic authenticity is delegated to
an optional ``SignatureVerifier``.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import ConfigDict, Field, field_validator

from agentaccess.constants import DenialReason
from agentaccess.exceptions import DependencyUnavailableError
from agentaccess.schema import WireModel

logger = logging.getLogger(__name__)


class AgentState(str, Enum):
    """Lifecycle states an agent may declare."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    ERROR = "error"


VALID_STATES = frozenset(state.value for state in AgentState)


class AgentCredentials(WireModel):
    """
    Credentials presented with every access request.

    Fields are parsed leniently so that missing or malformed values are
    reported as an ``invalid_credentials`` denial instead of a parse error.
    """

    model_config = ConfigDict(frozen=True)

    agent_id: str = ""
    role: str = ""
    capabilities: list[str] = Field(default_factory=list)
    current_state: str = ""

    # Optional association context declared by the agent
    project_context: Optional[str] = None
    collaboration_id: Optional[str] = None
    task_id: Optional[str] = None

    # Issuance (epoch ms)
    timestamp: int = 0
    signature: str = Field(default="", description="Opaque; not verified here")
    session_id: str = ""
    expires_at: int = 0

    @field_validator("agent_id", "role", "current_state", "signature", "session_id", mode="before")
    @classmethod
    def _null_as_empty_str(cls, value):
        return "" if value is None else value

    @field_validator("capabilities", mode="before")
    @classmethod
    def _null_as_empty_list(cls, value):
        return [] if value is None else value

    @field_validator("timestamp", "expires_at", mode="before")
    @classmethod
    def _null_as_zero(cls, value):
        return 0 if value is None else value


SignatureVerifier = Callable[[AgentCredentials], bool]


def validate_credentials(credentials: AgentCredentials) -> Optional[DenialReason]:
    """Structural credential check. Returns a denial reason or ``None``."""
    if not credentials.agent_id or not credentials.role or not credentials.signature:
        logger.debug("Credentials missing required fields (agent=%r)", credentials.agent_id)
        return DenialReason.INVALID_CREDENTIALS

    if credentials.current_state not in VALID_STATES:
        logger.debug(
            "Invalid agent state %r for agent %s",
            credentials.current_state,
            credentials.agent_id,
        )
        return DenialReason.INVALID_CREDENTIALS

    if not credentials.capabilities:
        logger.debug("No capabilities declared by agent %s", credentials.agent_id)
        return DenialReason.INVALID_CREDENTIALS

    return None


def verify_signature(
    verifier: Optional[SignatureVerifier],
    credentials: AgentCredentials,
) -> Optional[DenialReason]:
    """Run the injected signature verifier, if any.

    A verifier that returns ``False`` denies; one that raises is reported
    as unavailable so the request fails closed.
    """
    if verifier is None:
        return None
    try:
        verified = verifier(credentials)
    except Exception as exc:
        raise DependencyUnavailableError(
            f"Signature verifier failed for agent {credentials.agent_id}"
        ) from exc
    if not verified:
        return DenialReason.INVALID_SIGNATURE
    return None


def is_expired(credentials: AgentCredentials, now: int) -> bool:
    """Credentials expire strictly after ``expires_at``."""
    return credentials.expires_at < now
