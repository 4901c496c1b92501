# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""Shared constants: reason codes, default ceilings and time spans."""

from enum import Enum

SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS

DEFAULT_REQUESTS_PER_HOUR = 100
DEFAULT_REQUESTS_PER_DAY = 1000
DEFAULT_TOKEN_TTL_SECONDS = 3600
DEFAULT_RENEWAL_LEAD_SECONDS = 600

OUTCOME_GRANTED = "granted"


class DenialReason(str, Enum):
    """Stable, machine-checkable denial codes persisted in audit records."""

    INVALID_CREDENTIALS = "invalid_credentials"
    INVALID_SIGNATURE = "invalid_signature"
    AGENT_NOT_FOUND_OR_INACTIVE = "agent_not_found_or_inactive"
    CREDENTIALS_EXPIRED = "credentials_expired"
    NO_POLICY_FOR_ROLE = "no_policy_for_role"
    RESOURCE_NOT_ACCESSIBLE = "resource_not_accessible"
    ACTION_NOT_PERMITTED = "action_not_permitted"
    PROJECT_CONTEXT_REQUIRED = "project_context_required"
    TASK_CONTEXT_REQUIRED = "task_context_required"
    COLLABORATION_CONTEXT_REQUIRED = "collaboration_context_required"
    CPU_QUOTA_EXCEEDED = "cpu_quota_exceeded"
    MEMORY_QUOTA_EXCEEDED = "memory_quota_exceeded"
    STORAGE_QUOTA_EXCEEDED = "storage_quota_exceeded"
    NETWORK_QUOTA_EXCEEDED = "network_quota_exceeded"
    RESOURCES_UNAVAILABLE = "resources_unavailable"
    OUTSIDE_BUSINESS_HOURS = "outside_business_hours"
    SESSION_DURATION_EXCEEDED = "session_duration_exceeded"
    HOURLY_RATE_LIMIT_EXCEEDED = "hourly_rate_limit_exceeded"
    DAILY_RATE_LIMIT_EXCEEDED = "daily_rate_limit_exceeded"
    DEPENDENCY_UNAVAILABLE = "dependency_unavailable"
    INTERNAL_ERROR = "internal_error"
