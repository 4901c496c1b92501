# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Access Decision Engine

Evaluates one ``AccessRequest`` through a fixed, short-circuiting chain:

1. credential structure (and optional signature verifier)
2. registry lookup, then credential expiry
3. policy resolution by the agent's registered role
4. contextual requirements
5. declared quotas (and optional live capacity probe)
6. time restrictions, when enforcement is enabled
7. sliding-window rate limits
8. grant or denial

Exactly one audit record is appended per call, after the decision is
known. The rate-limit check and the append happen under one lock so
concurrent requests for the same pair never both pass on a stale count.
"""

import logging
import threading
import time
from typing import Callable, Optional

from agentaccess.config import EngineConfig
from agentaccess.constants import OUTCOME_GRANTED, DenialReason
from agentaccess.exceptions import ConfigError, DependencyUnavailableError
from agentaccess.governance.context import evaluate_context
from agentaccess.governance.policy import PolicyStore, ResourcePermission, resolve_permission
from agentaccess.governance.quota import CapacityProbe, check_capacity, check_quotas
from agentaccess.governance.schedule import check_time_restrictions
from agentaccess.identity.credentials import (
    SignatureVerifier,
    is_expired,
    validate_credentials,
    verify_signature,
)
from agentaccess.models import AccessRequest, AccessResult
from agentaccess.observability.metrics import DecisionMetrics
from agentaccess.schema import now_ms
from agentaccess.services.audit import AuditRecord, AuditStore, InMemoryAuditStore
from agentaccess.services.rate_limiter import SlidingWindowRateLimiter
from agentaccess.services.registry import AgentRegistry, lookup_agent
from agentaccess.services.tokens import TokenIssuer, generate_request_id

logger = logging.getLogger(__name__)

# Collaborator failures that map to a dependency_unavailable denial
UNAVAILABLE_ERRORS = (DependencyUnavailableError, TimeoutError, ConnectionError)


class AccessDecisionEngine:
    """
    Decides whether an agent may perform an action on a resource.

    Args:
        registry: Agent registry collaborator (``lookup``).
        policies: Policy store collaborator (``resolve``).
        audit_store: Audit sink; a private in-memory store by default.
        config: Engine configuration.
        clock: Returns the current time in epoch milliseconds.
        signature_verifier: Optional cryptographic check run before registry lookup.
        capacity_probe: Optional live-capacity check run after quota checks.
        metrics: Prometheus metrics; a private registry by default.

    Raises:
        ConfigError: If the audit store cannot count back over the daily window.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        policies: PolicyStore,
        audit_store: Optional[AuditStore] = None,
        config: Optional[EngineConfig] = None,
        clock: Optional[Callable[[], int]] = None,
        signature_verifier: Optional[SignatureVerifier] = None,
        capacity_probe: Optional[CapacityProbe] = None,
        metrics: Optional[DecisionMetrics] = None,
    ) -> None:
        self.registry = registry
        self.policies = policies
        self.audit_store = audit_store if audit_store is not None else InMemoryAuditStore()
        self.config = config or EngineConfig()

        retention = self.audit_store.index_retention_ms
        if retention is not None and retention < self.config.day_window_ms:
            raise ConfigError(
                f"Audit index retention {retention}ms is shorter than the "
                f"{self.config.day_window_ms}ms daily rate-limit window"
            )

        self.metrics = metrics or DecisionMetrics()
        self._clock = clock or now_ms
        self._signature_verifier = signature_verifier
        self._capacity_probe = capacity_probe

        self.rate_limiter = SlidingWindowRateLimiter(
            self.audit_store,
            requests_per_hour=self.config.requests_per_hour,
            requests_per_day=self.config.requests_per_day,
            hour_window_ms=self.config.hour_window_ms,
            day_window_ms=self.config.day_window_ms,
        )
        self._issuer = TokenIssuer(self.config)
        self._lock = threading.Lock()

    def evaluate(self, request: AccessRequest) -> AccessResult:
        """Evaluate one request. Never raises for a denial."""
        started = time.perf_counter()
        now = self._clock()
        agent_id = request.credentials.agent_id
        request_id = generate_request_id(now)

        try:
            permission, reason = self._check_prerequisites(request, now)
        except UNAVAILABLE_ERRORS as exc:
            logger.warning("Collaborator unavailable while evaluating %s: %s", request_id, exc)
            permission, reason = None, DenialReason.DEPENDENCY_UNAVAILABLE
        except Exception:
            logger.exception("Unexpected error while evaluating %s", request_id)
            permission, reason = None, DenialReason.INTERNAL_ERROR

        with self._lock:
            result = self._decide(request, permission, reason, request_id, now)
            outcome = OUTCOME_GRANTED if result.granted else result.reason
            record = AuditRecord(
                request_id=request_id,
                agent_id=agent_id,
                resource=request.resource,
                action=request.action.value,
                outcome=outcome,
                timestamp=now,
            )
            try:
                self.audit_store.append(record)
            except Exception:
                logger.exception("Audit append failed for %s; denying", request_id)
                result = TokenIssuer.deny(DenialReason.INTERNAL_ERROR, request_id, now)
                outcome = result.reason
            else:
                self.metrics.record_audit_append()

        self.metrics.record_decision(outcome, time.perf_counter() - started)
        if result.granted:
            logger.info(
                "Access granted: agent=%s resource=%s action=%s request=%s",
                agent_id, request.resource, request.action.value, request_id,
            )
        else:
            logger.info(
                "Access denied: agent=%s resource=%s action=%s reason=%s request=%s",
                agent_id, request.resource, request.action.value, outcome, request_id,
            )
        return result

    def _check_prerequisites(
        self,
        request: AccessRequest,
        now: int,
    ) -> tuple[Optional[ResourcePermission], Optional[DenialReason]]:
        """Run every stage that does not touch shared state."""
        credentials = request.credentials

        reason = validate_credentials(credentials)
        if reason:
            return None, reason

        reason = verify_signature(self._signature_verifier, credentials)
        if reason:
            return None, reason

        agent, reason = lookup_agent(self.registry, credentials.agent_id)
        if reason:
            return None, reason

        if is_expired(credentials, now):
            return None, DenialReason.CREDENTIALS_EXPIRED

        policy = self.policies.resolve(agent.role)
        permission, reason = resolve_permission(policy, request.resource, request.action)
        if reason:
            return None, reason

        restrictions = permission.restrictions

        reason = evaluate_context(restrictions.contextual_requirements, request.context)
        if reason:
            return None, reason

        reason = check_quotas(restrictions.resource_quotas, request.requested_resources)
        if reason:
            return None, reason

        reason = check_capacity(self._capacity_probe, request.requested_resources)
        if reason:
            return None, reason

        if self.config.enforce_time_restrictions:
            reason = check_time_restrictions(
                restrictions.time_restrictions, credentials, now, self.config
            )
            if reason:
                return None, reason

        return permission, None

    def _decide(
        self,
        request: AccessRequest,
        permission: Optional[ResourcePermission],
        reason: Optional[DenialReason],
        request_id: str,
        now: int,
    ) -> AccessResult:
        """Rate-limit check and result synthesis. Caller holds the lock."""
        agent_id = request.credentials.agent_id
        try:
            if reason is None:
                reason = self.rate_limiter.check(agent_id, request.resource, now)
            if reason is None:
                return self._issuer.grant(agent_id, permission, request_id, now)
        except UNAVAILABLE_ERRORS as exc:
            logger.warning("Audit store unavailable while deciding %s: %s", request_id, exc)
            reason = DenialReason.DEPENDENCY_UNAVAILABLE
        except Exception:
            logger.exception("Unexpected error while deciding %s", request_id)
            reason = DenialReason.INTERNAL_ERROR
        return TokenIssuer.deny(reason, request_id, now)
