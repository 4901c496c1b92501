#!/usr/bin/env python3
"""
AgentAccess - Access Request Walkthrough

Evaluates three requests against the bundled coder/researcher policies:
  1. A coder agent writing to the code repository (granted)
  2. A researcher agent reading data sources (granted)
  3. The coder request again without a task id (denied)

Run: python access_request_demo.py   (after `pip install -e .`)
"""

import json
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from agentaccess import AccessDecisionEngine, AccessRequest, AgentRegistry, PolicyStore
from agentaccess.schema import now_ms

HERE = Path(__file__).resolve().parent
HOUR_MS = 60 * 60 * 1000

console = Console()


def load_request(name: str) -> AccessRequest:
    """Load a request file and refresh its credential timestamps."""
    data = json.loads((HERE / "requests" / name).read_text())
    issued = now_ms()
    data["credentials"]["timestamp"] = issued
    data["credentials"]["expiresAt"] = issued + HOUR_MS
    return AccessRequest.model_validate(data)


def main():
    engine = AccessDecisionEngine(
        AgentRegistry.from_yaml(HERE / "registry.yaml"),
        PolicyStore.from_directory(HERE / "policies"),
    )

    console.print(Panel("[bold]AgentAccess - Access Request Examples[/bold]", border_style="blue"))

    examples = [
        ("Coder agent requesting code repository access", "coder_write.json"),
        ("Researcher agent requesting data source access", "researcher_read.json"),
        ("Access denied due to missing task context", "coder_missing_task.json"),
    ]
    for number, (title, filename) in enumerate(examples, start=1):
        console.print(f"\n[bold cyan]Example {number}:[/bold cyan] {title}")
        result = engine.evaluate(load_request(filename))
        console.print_json(json.dumps(result.to_wire()))

    console.print(f"\n[dim]Audit records written: {len(engine.audit_store)}[/dim]")


if __name__ == "__main__":
    main()
