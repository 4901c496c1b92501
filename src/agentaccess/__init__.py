"""
AgentAccess - Access-Control Decision Engine for Autonomous Agents

Given an agent's credentials and a resource access request, decide whether
to grant access, under what restrictions, for how long, and with what
auditable record.

Version: 0.1.0
"""

__version__ = "0.1.0"

from .constants import OUTCOME_GRANTED, DenialReason
from .config import EngineConfig
from .identity import AgentCredentials, AgentState
from .governance import (
    AccessPolicy,
    Action,
    ContextualRequirements,
    PolicyStore,
    ResourcePermission,
    ResourceQuotas,
    Restrictions,
    TimeRestrictions,
)
from .models import AccessRequest, AccessResult, RequestContext, RequestedResources
from .services import (
    AgentRecord,
    AgentRegistry,
    AuditRecord,
    AuditStore,
    InMemoryAuditStore,
    SlidingWindowRateLimiter,
)
from .engine import AccessDecisionEngine
from .exceptions import (
    AgentAccessError,
    AuditError,
    ConfigError,
    DependencyUnavailableError,
    PolicyError,
    RegistryError,
)

__all__ = [
    "__version__",

    # Engine
    "AccessDecisionEngine",
    "EngineConfig",
    "DenialReason",
    "OUTCOME_GRANTED",

    # Requests & results
    "AccessRequest",
    "AccessResult",
    "RequestContext",
    "RequestedResources",
    "AgentCredentials",
    "AgentState",

    # Policy
    "AccessPolicy",
    "Action",
    "ContextualRequirements",
    "PolicyStore",
    "ResourcePermission",
    "ResourceQuotas",
    "Restrictions",
    "TimeRestrictions",

    # Collaborators
    "AgentRecord",
    "AgentRegistry",
    "AuditRecord",
    "AuditStore",
    "InMemoryAuditStore",
    "SlidingWindowRateLimiter",

    # Exceptions
    "AgentAccessError",
    "AuditError",
    "ConfigError",
    "DependencyUnavailableError",
    "PolicyError",
    "RegistryError",
]
