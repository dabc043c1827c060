"""Command-line interface for registering and running aggregated tests."""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .config import SessionConfig
from .constants import BUILD_ALL_TESTS, RUN_ALL_TESTS
from .errors import MissingDependencyError, TargetError
from .frameworks import ENTRY_POINT_NAMES, Framework
from .orchestrator import RegistrationOrchestrator
from .runner import RunWrapper, TargetRunner

console = Console()


def _default_available(framework: str) -> list[str]:
    """Assume the preferred entry point of the chosen framework exists."""
    fw = Framework.GTEST if framework == "auto" else Framework(framework)
    return [ENTRY_POINT_NAMES[fw][0]]


def _register_all(config: SessionConfig, tests: tuple[str, ...]) -> RegistrationOrchestrator:
    orchestrator = RegistrationOrchestrator.from_config(config)
    try:
        for name in tests:
            orchestrator.register_test(name)
    except MissingDependencyError as e:
        console.print(f"[red]Fatal: {e}[/red]")
        sys.exit(1)
    except TargetError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)
    return orchestrator


def session_options(func):
    """Options shared by every command that registers tests."""
    options = [
        click.argument("tests", nargs=-1, required=True),
        click.option("--build-root", type=click.Path(file_okay=False, path_type=Path), default="build",
                     show_default=True, help="Root of the build tree"),
        click.option("--project-name", required=True, help="Project the results directory is scoped to"),
        click.option("--framework", type=click.Choice(["auto", "gtest", "catch2"]), default="auto",
                     show_default=True, help="Test framework providing main()"),
        click.option("--available", "available", multiple=True,
                     help="Target name provided by the build environment. Can be specified multiple times. "
                          "If omitted, the preferred entry point of --framework is assumed available "
                          "(googletest for auto)."),
        click.option("--verbose", "-v", is_flag=True, help="Verbose output"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _make_config(build_root, project_name, framework, available, verbose, bin_dir=None) -> SessionConfig:
    try:
        return SessionConfig(
            build_root=build_root,
            project_name=project_name,
            framework=framework,
            available_targets=list(available) or _default_available(framework),
            bin_dir=bin_dir,
            verbose=verbose,
        )
    except ValueError as e:
        raise click.UsageError(str(e))


@click.group()
@click.version_option(package_name="testagg")
def main():
    """Register test executables under build-all-tests and run-all-tests."""
    pass


@main.command()
@session_options
@click.option("--json", "as_json", is_flag=True, help="Print the graph as JSON")
@click.option("--order", type=click.Choice([BUILD_ALL_TESTS, RUN_ALL_TESTS]), default=None,
              help="Print the execution order of an aggregate instead of the graph")
def graph(tests, build_root, project_name, framework, available, verbose, as_json, order):
    """Register TESTS and show the resulting target graph."""
    config = _make_config(build_root, project_name, framework, available, verbose)
    orchestrator = _register_all(config, tests)
    registry = orchestrator.registry

    if order:
        steps = registry.build_order(order)
        if as_json:
            click.echo(json.dumps(steps, indent=2))
        else:
            for i, name in enumerate(steps, 1):
                console.print(f"{i:3d}. {name}")
        return

    if as_json:
        click.echo(json.dumps(registry.to_dict(), indent=2))
        return

    table = Table(title=f"Targets ({len(registry)})")
    table.add_column("Target", style="cyan")
    table.add_column("Kind")
    table.add_column("Depends on")
    for target in registry:
        table.add_row(target.name, target.kind.value, ", ".join(sorted(target.dependencies)))
    console.print(table)


@main.command()
@session_options
@click.option("--bin-dir", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Directory with the compiled test executables (default: <build-root>/bin)")
@click.option("--timeout", type=float, default=None, help="Per-test timeout in seconds")
def run(tests, build_root, project_name, framework, available, verbose, bin_dir, timeout):
    """Register TESTS and execute run-all-tests.

    Exits 0 even when tests fail; failures are recorded in the XML reports.
    """
    config = _make_config(build_root, project_name, framework, available, verbose, bin_dir)
    orchestrator = _register_all(config, tests)

    runner = TargetRunner(
        orchestrator.registry,
        config.artifacts_dir,
        wrapper=RunWrapper(timeout=timeout, verbose=verbose),
        verbose=verbose,
    )
    try:
        results = runner.run(RUN_ALL_TESTS)
    except TargetError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    table = Table(title="Test runs")
    table.add_column("Target", style="cyan")
    table.add_column("Exit code", justify="right")
    table.add_column("Status")
    table.add_column("Results")
    for r in results:
        if r.timed_out:
            status = "[yellow]timed out[/yellow]"
        elif r.test_passed:
            status = "[green]passed[/green]"
        else:
            status = "[red]failed[/red]"
        exit_code = "-" if r.exit_code is None else str(r.exit_code)
        table.add_row(r.target, exit_code, status, str(r.results_path))
    console.print(table)

    failed = sum(1 for r in results if not r.test_passed)
    if failed:
        console.print(f"[yellow]{failed} of {len(results)} test executable(s) failed[/yellow]")


if __name__ == "__main__":
    main()
