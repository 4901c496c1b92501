# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Quota Checks

Compares requested resources against the ceilings declared in policy.
A ceiling that is not declared is not enforced; a dimension that is not
requested never fails. Live system load is only consulted through an
optional ``CapacityProbe``.
"""

import logging
from typing import Callable, Optional

from agentaccess.constants import DenialReason
from agentaccess.exceptions import DependencyUnavailableError
from agentaccess.governance.policy import ResourceQuotas
from agentaccess.models import RequestedResources

logger = logging.getLogger(__name__)

CapacityProbe = Callable[[RequestedResources], bool]

# Checked in this order; the first exceeded dimension wins.
QUOTA_DIMENSIONS: tuple[tuple[str, DenialReason], ...] = (
    ("cpu_cores", DenialReason.CPU_QUOTA_EXCEEDED),
    ("memory_gb", DenialReason.MEMORY_QUOTA_EXCEEDED),
    ("storage_gb", DenialReason.STORAGE_QUOTA_EXCEEDED),
    ("network_mbps", DenialReason.NETWORK_QUOTA_EXCEEDED),
)


def check_quotas(
    quotas: Optional[ResourceQuotas],
    requested: Optional[RequestedResources],
) -> Optional[DenialReason]:
    """Return a quota-specific denial if any requested value exceeds its ceiling."""
    if quotas is None or requested is None:
        return None

    for field, reason in QUOTA_DIMENSIONS:
        ceiling = getattr(quotas, field)
        amount = getattr(requested, field)
        if ceiling is None or amount is None:
            continue
        if amount > ceiling:
            logger.debug("Requested %s=%s exceeds ceiling %s", field, amount, ceiling)
            return reason

    return None


def check_capacity(
    probe: Optional[CapacityProbe],
    requested: Optional[RequestedResources],
) -> Optional[DenialReason]:
    """Ask the live capacity probe, if configured, whether the request fits."""
    if probe is None:
        return None
    wanted = requested or RequestedResources()
    try:
        available = probe(wanted)
    except Exception as exc:
        raise DependencyUnavailableError("Capacity probe failed") from exc
    if not available:
        return DenialReason.RESOURCES_UNAVAILABLE
    return None
