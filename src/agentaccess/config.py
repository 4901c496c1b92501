# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Engine Configuration

Rate ceilings, window lengths, token lifetime and optional time-restriction
enforcement. Loadable from YAML.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from agentaccess.constants import (
    DEFAULT_RENEWAL_LEAD_SECONDS,
    DEFAULT_REQUESTS_PER_DAY,
    DEFAULT_REQUESTS_PER_HOUR,
    DEFAULT_TOKEN_TTL_SECONDS,
    SECOND_MS,
)
from agentaccess.exceptions import ConfigError


class EngineConfig(BaseModel):
    """Configuration for the access decision engine."""

    # Sliding-window rate limits per (agent, resource)
    requests_per_hour: int = Field(default=DEFAULT_REQUESTS_PER_HOUR, ge=1)
    requests_per_day: int = Field(default=DEFAULT_REQUESTS_PER_DAY, ge=1)
    hour_window_seconds: int = Field(default=3600, ge=1)
    day_window_seconds: int = Field(default=86400, ge=1)

    # Token issuance
    token_ttl_seconds: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS, ge=1)
    renewal_lead_seconds: int = Field(
        default=DEFAULT_RENEWAL_LEAD_SECONDS,
        ge=0,
        description="How long before expiry the renewal hint points",
    )

    # Time restrictions are declared in policy but only enforced when enabled
    enforce_time_restrictions: bool = False
    business_hours_start: int = Field(default=9, ge=0, le=23)
    business_hours_end: int = Field(default=17, ge=1, le=24)
    business_days: list[int] = Field(
        default_factory=lambda: [0, 1, 2, 3, 4],
        description="ISO weekdays as datetime.weekday() values (Monday=0)",
    )

    @model_validator(mode="after")
    def _check_consistency(self) -> "EngineConfig":
        if self.renewal_lead_seconds >= self.token_ttl_seconds:
            raise ValueError("renewal_lead_seconds must be shorter than token_ttl_seconds")
        if self.business_hours_start >= self.business_hours_end:
            raise ValueError("business_hours_start must be before business_hours_end")
        if self.day_window_seconds < self.hour_window_seconds:
            raise ValueError("day_window_seconds must not be shorter than hour_window_seconds")
        return self

    @property
    def hour_window_ms(self) -> int:
        return self.hour_window_seconds * SECOND_MS

    @property
    def day_window_ms(self) -> int:
        return self.day_window_seconds * SECOND_MS

    @property
    def token_ttl_ms(self) -> int:
        return self.token_ttl_seconds * SECOND_MS

    @property
    def renewal_lead_ms(self) -> int:
        return self.renewal_lead_seconds * SECOND_MS

    @classmethod
    def from_yaml(cls, path: str | Path) -> "EngineConfig":
        """Load configuration from a YAML file. An empty file yields defaults."""
        path = Path(path)
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
            return cls(**data)
        except (OSError, yaml.YAMLError, ValidationError, TypeError) as exc:
            raise ConfigError(f"Invalid engine configuration {path}: {exc}") from exc
