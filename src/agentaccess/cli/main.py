# Copyright (c) Agent-Access Contributors. All rights reserved.
# Licensed under the MIT License.
"""
AgentAccess CLI

Commands for trying the decision engine against policy and registry files:
- evaluate: Evaluate an access request JSON document
- policies: Show loaded role policies
"""

import json
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

from agentaccess.config import EngineConfig
from agentaccess.engine import AccessDecisionEngine
from agentaccess.exceptions import AgentAccessError
from agentaccess.governance.policy import PolicyStore
from agentaccess.models import AccessRequest, AccessResult
from agentaccess.services.registry import AgentRegistry

console = Console()


def _output_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2))


def _load_request(path: Path) -> AccessRequest:
    try:
        return AccessRequest.model_validate_json(path.read_text())
    except (OSError, ValidationError) as exc:
        raise click.ClickException(f"Invalid access request {path}: {exc}") from exc


def _print_result(result: AccessResult) -> None:
    if result.granted:
        console.print("\n[bold green]Access granted[/bold green]\n")
    else:
        console.print(f"\n[bold red]Access denied:[/bold red] {result.reason}\n")

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Request ID", result.request_id)
    if result.granted:
        details = result.details
        table.add_row("Permissions", ", ".join(a.value for a in details.permissions))
        table.add_row("Restrictions", ", ".join(details.restrictions) or "-")
        limits = details.resource_limits.to_wire()
        table.add_row("Resource Limits", ", ".join(f"{k}={v}" for k, v in limits.items()) or "-")
        table.add_row("Access Token", result.access_token)
        table.add_row("Expires At", str(result.expires_at))
        table.add_row("Renew At", str(result.next_renewal_time))
    console.print(table)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool):
    """Evaluate agent access requests against role policies."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("request_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--policies", "policies_dir", required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of role policy YAML files.",
)
@click.option(
    "--registry", "registry_file", required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Agent registry YAML file.",
)
@click.option(
    "--config", "config_file", default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Engine configuration YAML file.",
)
@click.option("--now", type=int, default=None, help="Evaluate at this epoch-ms time instead of the clock.")
@click.option("--json", "json_flag", is_flag=True, help="Output the result as JSON.")
def evaluate(
    request_file: Path,
    policies_dir: Path,
    registry_file: Path,
    config_file: Optional[Path],
    now: Optional[int],
    json_flag: bool,
):
    """Evaluate REQUEST_FILE. Exits 1 when access is denied."""
    try:
        policies = PolicyStore.from_directory(policies_dir)
        registry = AgentRegistry.from_yaml(registry_file)
        config = EngineConfig.from_yaml(config_file) if config_file else EngineConfig()
    except AgentAccessError as exc:
        raise click.ClickException(str(exc)) from exc

    request = _load_request(request_file)
    engine = AccessDecisionEngine(
        registry,
        policies,
        config=config,
        clock=(lambda: now) if now is not None else None,
    )
    result = engine.evaluate(request)

    if json_flag:
        _output_json(result.to_wire())
    else:
        _print_result(result)

    if not result.granted:
        sys.exit(1)


@cli.command("policies")
@click.option(
    "--policies", "policies_dir", required=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory of role policy YAML files.",
)
@click.option("--role", default=None, help="Only show this role.")
@click.option("--json", "json_flag", is_flag=True, help="Output as JSON.")
def show_policies(policies_dir: Path, role: Optional[str], json_flag: bool):
    """List roles, resources and allowed actions."""
    try:
        store = PolicyStore.from_directory(policies_dir)
    except AgentAccessError as exc:
        raise click.ClickException(str(exc)) from exc

    roles = [role] if role else store.roles()
    policies = [store.resolve(r) for r in roles]
    if any(p is None for p in policies):
        raise click.ClickException(f"No policy for role {role}")

    if json_flag:
        _output_json([p.to_wire() for p in policies])
        return

    table = Table(box=box.ROUNDED)
    table.add_column("Role", style="cyan", no_wrap=True)
    table.add_column("Resource")
    table.add_column("Actions")
    table.add_column("Restrictions", style="dim")
    for policy in policies:
        for resource, permission in policy.resource_permissions.items():
            table.add_row(
                policy.role,
                resource,
                ", ".join(a.value for a in permission.allowed_actions),
                ", ".join(permission.restrictions.active_names()) or "-",
            )
    console.print(table)


if __name__ == "__main__":
    cli()
