"""CLI output formatting helpers."""

from typing import Any

import click

from .config import CONFIG_KEYS, SuiteConfig
from .scenario import Scenario, ScenarioResult


def print_scenario_result(result: ScenarioResult, verbose: bool = False) -> None:
    """Print one scenario outcome.

    Passed scenarios print a single line; failed ones add the failing step,
    the failure kind and the assertion message.

    Args:
        result: Scenario result
        verbose: Also list every executed step
    """
    mark = "✓" if result.passed else "✗"
    click.echo(f"{mark} {result.scenario} ({result.duration:.2f}s)")

    if verbose or not result.passed:
        for step in result.steps:
            step_mark = "✓" if step.passed else "✗"
            click.echo(f"    {step_mark} {step.name} [{step.state.value}]")

    failed = result.failed_step
    if failed is not None:
        kind = failed.kind.value if failed.kind else "error"
        click.echo(f"  Failed at '{failed.name}' ({kind}):")
        for line in failed.message.splitlines():
            click.echo(f"    {line}")


def print_summary(results: list[ScenarioResult]) -> None:
    passed = sum(1 for r in results if r.passed)
    failed = len(results) - passed
    click.echo(f"\n{len(results)} scenarios: {passed} passed, {failed} failed")


def print_scenarios_list(scenarios: list[Scenario]) -> None:
    """Print registered scenarios with their ordered steps."""
    click.echo(f"Scenarios ({len(scenarios)}):\n")
    for scenario in scenarios:
        click.echo(f"{scenario.name}: {scenario.description}")
        for i, name in enumerate(scenario.step_names, 1):
            click.echo(f"  {i}. {name}")
        click.echo()


def config_as_dict(config: SuiteConfig) -> dict[str, Any]:
    values = config.to_dict()
    return {
        "values": values,
        "sources": {key: config.get_source(key) for key in CONFIG_KEYS},
    }


def print_config(config: SuiteConfig) -> None:
    """Print effective configuration and where each value came from."""
    click.echo("Bookstore API Test Configuration\n")
    for key, value in config.to_dict().items():
        click.echo(f"  {key}: {value}  ({config.get_source(key)})")
