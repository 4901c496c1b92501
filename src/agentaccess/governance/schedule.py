# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""Time restriction checks: business hours and maximum session length."""

from datetime import datetime, timezone
from typing import Optional

from agentaccess.config import EngineConfig
from agentaccess.constants import HOUR_MS, DenialReason
from agentaccess.governance.policy import TimeRestrictions
from agentaccess.identity.credentials import AgentCredentials


def within_business_hours(now: int, config: EngineConfig) -> bool:
    """True when ``now`` (epoch ms) falls in the configured UTC weekday window."""
    moment = datetime.fromtimestamp(now / 1000, tz=timezone.utc)
    if moment.weekday() not in config.business_days:
        return False
    return config.business_hours_start <= moment.hour < config.business_hours_end


def check_time_restrictions(
    restrictions: Optional[TimeRestrictions],
    credentials: AgentCredentials,
    now: int,
    config: EngineConfig,
) -> Optional[DenialReason]:
    if restrictions is None:
        return None

    if restrictions.business_hours_only and not within_business_hours(now, config):
        return DenialReason.OUTSIDE_BUSINESS_HOURS

    if restrictions.max_session_hours is not None:
        session_ms = now - credentials.timestamp
        if session_ms > restrictions.max_session_hours * HOUR_MS:
            return DenialReason.SESSION_DURATION_EXCEEDED

    return None
