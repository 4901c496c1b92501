"""Shared fixtures: example policies/registry, a controllable clock."""

import pytest

from agentaccess import AccessDecisionEngine, AgentRegistry, EngineConfig, PolicyStore

from tests.helpers import EXAMPLES_DIR, FakeClock


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def policies() -> PolicyStore:
    return PolicyStore.from_directory(EXAMPLES_DIR / "policies")


@pytest.fixture
def registry() -> AgentRegistry:
    return AgentRegistry.from_yaml(EXAMPLES_DIR / "registry.yaml")


@pytest.fixture
def engine(registry: AgentRegistry, policies: PolicyStore, clock: FakeClock) -> AccessDecisionEngine:
    return AccessDecisionEngine(registry, policies, config=EngineConfig(), clock=clock)
