# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
Identity

Agent credentials and the structural validation stage.
"""

from .credentials import (
    AgentCredentials,
    AgentState,
    SignatureVerifier,
    is_expired,
    validate_credentials,
    verify_signature,
)

__all__ = [
    "AgentCredentials",
    "AgentState",
    "SignatureVerifier",
    "is_expired",
    "validate_credentials",
    "verify_signature",
]
