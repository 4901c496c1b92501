# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""Centralized exception hierarchy for AgentAccess.

Access decisions are never raised: a denial is an ``AccessResult``.
These exceptions cover configuration mistakes and collaborator failures.
"""


class AgentAccessError(Exception):
    """Base exception for all AgentAccess errors."""


class ConfigError(AgentAccessError):
    """Engine configuration could not be loaded or is invalid."""


class PolicyError(AgentAccessError):
    """A policy document is malformed or could not be loaded."""


class RegistryError(AgentAccessError):
    """Errors related to agent registry management."""


class DependencyUnavailableError(AgentAccessError):
    """A collaborator (registry, policy store, verifier, probe) could not answer."""


class AuditError(AgentAccessError):
    """An audit record could not be appended or queried."""


__all__ = [
    "AgentAccessError",
    "ConfigError",
    "PolicyError",
    "RegistryError",
    "DependencyUnavailableError",
    "AuditError",
]
