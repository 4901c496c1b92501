"""Shared constants and request builders for the test suite."""

from pathlib import Path
from typing import Any, Optional

from agentaccess import AccessRequest

EXAMPLES_DIR = Path(__file__).resolve().parents[1] / "examples"

# Thursday 2025-10-09 08:53:20 UTC
NOW = 1_760_000_000_000
HOUR_MS = 60 * 60 * 1000
MINUTE_MS = 60 * 1000

CODER_ID = "liori-coder-alpha-001"
RESEARCHER_ID = "liori-researcher-beta"
RETIRED_ID = "liori-coder-retired-007"


class FakeClock:
    """Epoch-ms clock that only moves when told to."""

    def __init__(self, now: int = NOW):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


def credentials_payload(**overrides: Any) -> dict:
    data = {
        "agentId": CODER_ID,
        "role": "coder",
        "capabilities": ["python", "javascript", "react"],
        "currentState": "idle",
        "projectContext": "customer-portal-v2",
        "collaborationId": "auth-feature-dev",
        "taskId": "implement-login-endpoint",
        "timestamp": NOW,
        "signature": "mock_signature_hash_abc123",
        "sessionId": "session_abc123",
        "expiresAt": NOW + HOUR_MS,
    }
    data.update(overrides)
    return data


def make_request(
    resource: str = "code_repository",
    action: str = "write",
    context: Optional[dict] = None,
    credentials: Optional[dict] = None,
    requested_resources: Optional[dict] = None,
    omit_requested: bool = False,
) -> AccessRequest:
    """Build the coder write request, with any part replaced."""
    data: dict[str, Any] = {
        "resource": resource,
        "action": action,
        "context": context if context is not None else {
            "projectId": "customer-portal-v2",
            "collaborationId": "auth-feature-dev",
            "taskId": "implement-login-endpoint",
        },
        "credentials": credentials if credentials is not None else credentials_payload(),
    }
    if not omit_requested:
        data["requestedResources"] = requested_resources if requested_resources is not None else {
            "cpuCores": 2,
            "memoryGB": 4,
            "storageGB": 2,
        }
    return AccessRequest.model_validate(data)

