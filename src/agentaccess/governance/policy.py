# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Access Policies

Role-scoped policies mapping resource names to allowed actions and
restrictions. Policies are declared in YAML/JSON and loaded into a
``PolicyStore``, which the decision engine queries by role.

Every restriction field is optional: absent means unconstrained.
"""

import json
import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from agentaccess.constants import DenialReason
from agentaccess.exceptions import PolicyError
from agentaccess.schema import WireModel

logger = logging.getLogger(__name__)


class Action(str, Enum):
    """Actions an agent may request on a resource."""

    READ = "read"
    WRITE = "write"
    EXECUTE = "execute"
    ADMIN = "admin"
    DEPLOY = "deploy"


class ResourceQuotas(WireModel):
    """Declared ceilings on requested compute and storage."""

    cpu_cores: Optional[float] = Field(None, ge=0)
    memory_gb: Optional[float] = Field(None, ge=0, alias="memoryGB")
    storage_gb: Optional[float] = Field(None, ge=0, alias="storageGB")
    network_mbps: Optional[float] = Field(None, ge=0)


class TimeRestrictions(WireModel):
    """When a grant may be used."""

    business_hours_only: Optional[bool] = None
    max_session_hours: Optional[float] = Field(None, gt=0)


class ContextualRequirements(WireModel):
    """Which request context identifiers must be present."""

    project_association: bool = False
    collaboration_context: bool = False
    task_context: bool = False


class Restrictions(WireModel):
    """Restriction categories attached to a resource permission."""

    max_concurrent_tasks: Optional[int] = Field(None, ge=1)
    resource_quotas: Optional[ResourceQuotas] = None
    time_restrictions: Optional[TimeRestrictions] = None
    contextual_requirements: Optional[ContextualRequirements] = None

    def active_names(self) -> list[str]:
        """Wire names of the restriction categories that are declared."""
        return [
            to_camel(name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        ]


class ResourcePermission(WireModel):
    """Allowed actions and restrictions for one resource."""

    allowed_actions: list[Action]
    restrictions: Restrictions = Field(default_factory=Restrictions)

    @field_validator("allowed_actions")
    @classmethod
    def _non_empty(cls, value: list[Action]) -> list[Action]:
        if not value:
            raise ValueError("allowed_actions must not be empty")
        # Preserve declaration order, drop duplicates
        return list(dict.fromkeys(value))

    def permits(self, action: Action) -> bool:
        return action in self.allowed_actions


class AccessPolicy(WireModel):
    """
    Complete policy document for one role.

    Example (YAML)::

        role: coder
        resourcePermissions:
          code_repository:
            allowedActions: [read, write, execute]
            restrictions:
              resourceQuotas: {cpuCores: 4, memoryGB: 8}
              contextualRequirements: {projectAssociation: true}
    """

    role: str = Field(..., min_length=1)
    resource_permissions: dict[str, ResourcePermission] = Field(default_factory=dict)

    def permission_for(self, resource: str) -> Optional[ResourcePermission]:
        return self.resource_permissions.get(resource)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AccessPolicy":
        """Load a policy from a YAML file."""
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
            return cls.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as exc:
            raise PolicyError(f"Invalid policy file {path}: {exc}") from exc

    @classmethod
    def from_json(cls, json_content: str) -> "AccessPolicy":
        """Load a policy from a JSON string."""
        try:
            return cls.model_validate(json.loads(json_content))
        except (json.JSONDecodeError, ValidationError) as exc:
            raise PolicyError(f"Invalid policy JSON: {exc}") from exc

    def to_yaml(self, path: str | Path) -> None:
        """Save this policy to a YAML file in wire form."""
        with open(Path(path), "w") as f:
            yaml.dump(self.to_wire(), f, default_flow_style=False, sort_keys=False)


class PolicyStore:
    """
    In-memory policy store keyed by role.

    Read-only from the decision engine's point of view; ``resolve`` is the
    only call it makes.
    """

    def __init__(self, policies: Optional[list[AccessPolicy]] = None):
        self._policies: dict[str, AccessPolicy] = {}
        self._lock = threading.Lock()
        for policy in policies or []:
            self.load_policy(policy)

    def load_policy(self, policy: AccessPolicy) -> None:
        """Add or replace the policy for ``policy.role``."""
        with self._lock:
            self._policies[policy.role] = policy
        logger.info(
            "Loaded policy for role %s (%d resources)",
            policy.role,
            len(policy.resource_permissions),
        )

    def load_yaml(self, path: str | Path) -> AccessPolicy:
        policy = AccessPolicy.from_yaml(path)
        self.load_policy(policy)
        return policy

    def resolve(self, role: str) -> Optional[AccessPolicy]:
        """Get the policy for a role, or ``None``."""
        return self._policies.get(role)

    def roles(self) -> list[str]:
        return sorted(self._policies)

    def remove(self, role: str) -> bool:
        with self._lock:
            return self._policies.pop(role, None) is not None

    @classmethod
    def from_directory(cls, directory: str | Path) -> "PolicyStore":
        """Load every ``*.yaml`` / ``*.yml`` policy in a directory."""
        directory = Path(directory)
        if not directory.is_dir():
            raise PolicyError(f"Policy directory not found: {directory}")
        store = cls()
        files = sorted(directory.glob("*.yaml")) + sorted(directory.glob("*.yml"))
        for path in files:
            store.load_yaml(path)
        return store


def resolve_permission(
    policy: Optional[AccessPolicy],
    resource: str,
    action: Action,
) -> tuple[Optional[ResourcePermission], Optional[DenialReason]]:
    """
    Find the permission entry for a resource and check the action.

    Missing role policy, missing resource entry and disallowed action are
    reported with distinct reasons, in that order.
    """
    if policy is None:
        return None, DenialReason.NO_POLICY_FOR_ROLE

    permission = policy.permission_for(resource)
    if permission is None:
        return None, DenialReason.RESOURCE_NOT_ACCESSIBLE

    if not permission.permits(action):
        return None, DenialReason.ACTION_NOT_PERMITTED

    return permission, None
