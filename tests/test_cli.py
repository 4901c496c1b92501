"""Tests for the AgentAccess CLI."""

import json

import pytest
from click.testing import CliRunner

from agentaccess.cli import cli

from tests.helpers import EXAMPLES_DIR, NOW

POLICIES = str(EXAMPLES_DIR / "policies")
REGISTRY = str(EXAMPLES_DIR / "registry.yaml")
REQUESTS = EXAMPLES_DIR / "requests"


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


def _evaluate(runner, request_name, *extra):
    return runner.invoke(
        cli,
        [
            "evaluate",
            str(REQUESTS / request_name),
            "--policies", POLICIES,
            "--registry", REGISTRY,
            "--now", str(NOW),
            *extra,
        ],
    )


# ---------------------------------------------------------------------------
# evaluate
# ---------------------------------------------------------------------------


class TestEvaluate:
    def test_granted_json(self, runner):
        result = _evaluate(runner, "coder_write.json", "--json")
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["granted"] is True
        assert data["expiresAt"] == NOW + 3_600_000
        assert data["accessToken"].startswith("token_liori-coder-alpha-001_")

    def test_researcher_granted(self, runner):
        result = _evaluate(runner, "researcher_read.json", "--json")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["details"]["permissions"] == ["read", "execute"]

    def test_denied_exits_nonzero(self, runner):
        result = _evaluate(runner, "coder_missing_task.json", "--json")
        assert result.exit_code == 1
        data = json.loads(result.output)
        assert data["granted"] is False
        assert data["reason"] == "task_context_required"

    def test_table_output(self, runner):
        result = _evaluate(runner, "coder_write.json")
        assert result.exit_code == 0
        assert "Access granted" in result.output
        assert "Request ID" in result.output

    def test_config_file(self, runner, tmp_path):
        config = tmp_path / "engine.yaml"
        config.write_text("token_ttl_seconds: 7200\n")
        result = _evaluate(runner, "coder_write.json", "--json", "--config", str(config))
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["expiresAt"] == NOW + 7_200_000

    def test_invalid_config(self, runner, tmp_path):
        config = tmp_path / "engine.yaml"
        config.write_text("requests_per_hour: -1\n")
        result = _evaluate(runner, "coder_write.json", "--config", str(config))
        assert result.exit_code != 0
        assert "Invalid engine configuration" in result.output

    def test_null_capabilities_is_a_denial(self, runner, tmp_path):
        data = json.loads((REQUESTS / "coder_write.json").read_text())
        data["credentials"]["capabilities"] = None
        request = tmp_path / "null_caps.json"
        request.write_text(json.dumps(data))

        result = runner.invoke(
            cli,
            ["evaluate", str(request), "--policies", POLICIES, "--registry", REGISTRY,
             "--now", str(NOW), "--json"],
        )
        assert result.exit_code == 1
        assert json.loads(result.output)["reason"] == "invalid_credentials"

    def test_malformed_registry(self, runner, tmp_path):
        registry = tmp_path / "registry.yaml"
        registry.write_text("- id: a\n  role: coder\n")
        result = runner.invoke(
            cli,
            ["evaluate", str(REQUESTS / "coder_write.json"), "--policies", POLICIES,
             "--registry", str(registry)],
        )
        assert result.exit_code == 1
        assert "must be a mapping" in result.output

    def test_malformed_request(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text('{"resource": "code_repository", "action": "destroy"}')
        result = runner.invoke(
            cli, ["evaluate", str(bad), "--policies", POLICIES, "--registry", REGISTRY]
        )
        assert result.exit_code != 0
        assert "Invalid access request" in result.output


# ---------------------------------------------------------------------------
# policies
# ---------------------------------------------------------------------------


class TestPolicies:
    def test_json(self, runner):
        result = runner.invoke(cli, ["policies", "--policies", POLICIES, "--json"])
        assert result.exit_code == 0
        roles = [p["role"] for p in json.loads(result.output)]
        assert roles == ["coder", "researcher"]

    def test_single_role(self, runner):
        result = runner.invoke(cli, ["policies", "--policies", POLICIES, "--role", "researcher", "--json"])
        data = json.loads(result.output)
        assert len(data) == 1
        assert "analysis_tools" in data[0]["resourcePermissions"]

    def test_unknown_role(self, runner):
        result = runner.invoke(cli, ["policies", "--policies", POLICIES, "--role", "auditor"])
        assert result.exit_code != 0
        assert "No policy for role auditor" in result.output

    def test_table(self, runner):
        result = runner.invoke(cli, ["policies", "--policies", POLICIES])
        assert result.exit_code == 0
        assert "code_repository" in result.output
