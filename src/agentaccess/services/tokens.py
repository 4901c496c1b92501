# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Decision & Token Issuer

Builds the final ``AccessResult``: a scoped grant with an access token,
expiry and renewal hint, or a denial carrying one reason code.
"""

import secrets
import uuid

from agentaccess.config import EngineConfig
from agentaccess.constants import DenialReason
from agentaccess.governance.policy import ResourcePermission, ResourceQuotas
from agentaccess.models import (
    AccessDetails,
    AccessResult,
    RateLimits,
    UsageTracking,
)


def generate_request_id(now: int) -> str:
    """Unique request id, e.g. ``req_1760000000000_3f9a1c2b7``."""
    return f"req_{now}_{uuid.uuid4().hex[:9]}"


def generate_access_token(agent_id: str, issued_at: int) -> str:
    """Opaque access token bound to the agent and issuance time."""
    return f"token_{agent_id}_{issued_at}_{secrets.token_hex(8)}"


class TokenIssuer:
    """Synthesizes grant and denial results.

    Args:
        config: Engine configuration supplying token lifetime, renewal lead
            and the advertised rate ceilings.
    """

    def __init__(self, config: EngineConfig) -> None:
        self._config = config

    def grant(
        self,
        agent_id: str,
        permission: ResourcePermission,
        request_id: str,
        now: int,
    ) -> AccessResult:
        """Issue a grant for a request that passed every check."""
        restrictions = permission.restrictions
        expires_at = now + self._config.token_ttl_ms

        return AccessResult(
            granted=True,
            details=AccessDetails(
                permissions=list(permission.allowed_actions),
                restrictions=restrictions.active_names(),
                resource_limits=restrictions.resource_quotas or ResourceQuotas(),
                usage_tracking=UsageTracking(
                    request_id=request_id,
                    timestamp=now,
                    rate_limits=RateLimits(
                        requests_per_hour=self._config.requests_per_hour,
                        requests_per_day=self._config.requests_per_day,
                    ),
                ),
            ),
            access_token=generate_access_token(agent_id, now),
            expires_at=expires_at,
            next_renewal_time=expires_at - self._config.renewal_lead_ms,
        )

    @staticmethod
    def deny(reason: DenialReason, request_id: str, now: int) -> AccessResult:
        """Denial with empty details and zeroed rate limits."""
        return AccessResult(
            granted=False,
            reason=reason.value,
            details=AccessDetails(
                usage_tracking=UsageTracking(request_id=request_id, timestamp=now),
            ),
        )
