"""CLI main entry point."""

import json
import sys

import click
from rich.console import Console

from . import __version__
from .config import load_config
from .formatters import (
    config_as_dict,
    print_config,
    print_scenario_result,
    print_scenarios_list,
    print_summary,
)
from .scenario import ScenarioRunner
from .shared.logging import configure_logging
from .suites import SCENARIOS, get_scenario

console = Console(stderr=True)

LOG_LEVELS = {0: "warning", 1: "info"}


@click.group()
@click.option("-c", "--config", type=click.Path(), help="Config file path")
@click.option("-v", "--verbose", count=True, help="Increase verbosity")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: int, json_output: bool) -> None:
    """End-to-end CRUD scenarios for the bookstore REST API."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["json_output"] = json_output
    configure_logging(LOG_LEVELS.get(verbose, "debug"), json_output=json_output)


@cli.command()
@click.argument("names", nargs=-1)
@click.option("--base-url", help="Bookstore API URL")
@click.option("--email", help="Login email")
@click.option("--password", help="Login password")
@click.option("-t", "--timeout", type=float, help="Request timeout in seconds")
@click.option("--insecure", is_flag=True, help="Skip TLS certificate verification")
@click.option("--seed", type=int, help="Seed for generated titles")
@click.pass_context
def run(
    ctx: click.Context,
    names: tuple[str, ...],
    base_url: str | None,
    email: str | None,
    password: str | None,
    timeout: float | None,
    insecure: bool,
    seed: int | None,
) -> None:
    """Run scenarios (all of them when no NAMES are given)."""
    try:
        scenarios = [get_scenario(name) for name in names] or list(SCENARIOS.values())
    except KeyError as e:
        console.print(f"[red]Error:[/red] {e.args[0]}")
        sys.exit(2)

    config = load_config(ctx.obj["config_path"]).override(
        base_url=base_url,
        email=email,
        password=password,
        timeout=timeout,
        insecure=insecure or None,
    )
    runner = ScenarioRunner(config, seed=seed)

    results = []
    for scenario in scenarios:
        result = runner.run(scenario)
        results.append(result)
        if not ctx.obj["json_output"]:
            print_scenario_result(result, verbose=ctx.obj["verbose"] > 0)

    if ctx.obj["json_output"]:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
    else:
        print_summary(results)

    if not all(r.passed for r in results):
        sys.exit(1)


@cli.command("list")
@click.pass_context
def list_scenarios(ctx: click.Context) -> None:
    """List registered scenarios and their steps."""
    scenarios = list(SCENARIOS.values())
    if ctx.obj["json_output"]:
        data = [
            {"name": s.name, "description": s.description, "steps": s.step_names}
            for s in scenarios
        ]
        click.echo(json.dumps(data, indent=2))
    else:
        print_scenarios_list(scenarios)


@cli.group()
def config() -> None:
    """Inspect suite configuration."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx: click.Context) -> None:
    """Show effective configuration and value sources."""
    suite_config = load_config(ctx.obj["config_path"])
    if ctx.obj["json_output"]:
        click.echo(json.dumps(config_as_dict(suite_config), indent=2))
    else:
        print_config(suite_config)


@cli.command()
def version() -> None:
    """Show version information."""
    click.echo(f"bookstore-apitests version {__version__}")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
