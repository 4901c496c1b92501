# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Request and Result Models

``AccessRequest`` is created per call and never persisted.
``AccessResult`` is the engine's answer; its JSON form matches the
documented interchange shape field for field.
"""

from typing import Optional

from pydantic import Field, model_validator

from agentaccess.governance.policy import Action, ResourceQuotas
from agentaccess.identity.credentials import AgentCredentials
from agentaccess.schema import WireModel


class RequestContext(WireModel):
    """Association metadata supplied with a request."""

    project_id: str = ""
    collaboration_id: Optional[str] = None
    task_id: Optional[str] = None
    user_context: Optional[str] = None


class RequestedResources(WireModel):
    """Compute/storage the agent intends to use. ``None`` means not requested."""

    cpu_cores: Optional[float] = Field(None, ge=0)
    memory_gb: Optional[float] = Field(None, ge=0, alias="memoryGB")
    storage_gb: Optional[float] = Field(None, ge=0, alias="storageGB")
    network_mbps: Optional[float] = Field(None, ge=0)


class AccessRequest(WireModel):
    """An agent's request to perform an action on a resource."""

    resource: str
    action: Action
    context: RequestContext = Field(default_factory=RequestContext)
    credentials: AgentCredentials
    requested_resources: Optional[RequestedResources] = None


class RateLimits(WireModel):
    requests_per_hour: int = 0
    requests_per_day: int = 0


class UsageTracking(WireModel):
    request_id: str
    timestamp: int
    rate_limits: RateLimits = Field(default_factory=RateLimits)


class AccessDetails(WireModel):
    """What a grant permits. Empty for denials."""

    permissions: list[Action] = Field(default_factory=list)
    restrictions: list[str] = Field(default_factory=list)
    resource_limits: ResourceQuotas = Field(default_factory=ResourceQuotas)
    usage_tracking: UsageTracking


class AccessResult(WireModel):
    """
    Outcome of one evaluation.

    A grant always carries a token and expiry; a denial never does and
    always carries a reason code.
    """

    granted: bool
    reason: Optional[str] = None
    details: AccessDetails
    access_token: Optional[str] = None
    expires_at: Optional[int] = None
    next_renewal_time: Optional[int] = None

    @model_validator(mode="after")
    def _check_invariant(self) -> "AccessResult":
        if self.granted:
            if self.access_token is None or self.expires_at is None:
                raise ValueError("granted result requires access_token and expires_at")
            if self.reason is not None:
                raise ValueError("granted result must not carry a reason")
        else:
            if self.access_token is not None or self.expires_at is not None:
                raise ValueError("denied result must not carry access_token or expires_at")
            if not self.reason:
                raise ValueError("denied result requires a reason")
        return self

    @property
    def request_id(self) -> str:
        return self.details.usage_tracking.request_id
