"""
Governance

Role policies and the policy, context, quota and time-restriction stages.
The stage functions live in ``governance.context``, ``governance.quota``
and ``governance.schedule``.
"""

from .policy import (
    AccessPolicy,
    Action,
    ContextualRequirements,
    PolicyStore,
    ResourcePermission,
    ResourceQuotas,
    Restrictions,
    TimeRestrictions,
    resolve_permission,
)

__all__ = [
    "AccessPolicy",
    "Action",
    "ContextualRequirements",
    "PolicyStore",
    "ResourcePermission",
    "ResourceQuotas",
    "Restrictions",
    "TimeRestrictions",
    "resolve_permission",
]
