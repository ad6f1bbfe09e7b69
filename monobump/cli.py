"""CLI entry point for monobump."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from monobump.errors import MonobumpError
from monobump.models import BumpType, DependencyKind
from monobump.propagation import compute_release_plan
from monobump.shell import step
from monobump.toml import load_workspace


def _parse_release(value: str) -> tuple[str, BumpType]:
    """Parse a -r NAME=BUMP option."""
    name, sep, bump = value.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=BUMP, got {value!r}")
    try:
        return name, BumpType.parse(bump)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group()
@click.version_option(package_name="monobump")
@click.option("-v", "--verbose", is_flag=True, help="Log propagation details.")
def cli(verbose: bool) -> None:
    """Work out which monorepo packages must be released, and how hard."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
def graph(workspace: Path) -> None:
    """List packages and their dependents."""
    try:
        dep_graph, _ = load_workspace(workspace)
        dep_graph.validate()
    except MonobumpError as exc:
        raise click.ClickException(str(exc)) from exc

    step("Workspace packages")
    for info in dep_graph:
        click.echo(f"  {info.name} {info.version}")
        for kind in DependencyKind:
            dependents = dep_graph.dependents_of(info.name, kind)
            if dependents:
                click.echo(f"    {kind} dependents: {', '.join(dependents)}")


@cli.command()
@click.argument("workspace", type=click.Path(path_type=Path))
@click.option(
    "-r",
    "--release",
    "releases",
    multiple=True,
    metavar="NAME=BUMP",
    help=(
        "Explicit release (repeatable). Adds to the file's [releases] table,"
        " replacing the entry for the same package."
    ),
)
@click.option("-s", "--summary", default="", help="Changeset summary text.")
@click.option("--json", "as_json", is_flag=True, help="Print the changeset as JSON.")
def plan(workspace: Path, releases: tuple[str, ...], summary: str, as_json: bool) -> None:
    """Compute the release plan for the requested bumps."""
    try:
        dep_graph, explicit = load_workspace(workspace)
    except MonobumpError as exc:
        raise click.ClickException(str(exc)) from exc

    for value in releases:
        name, bump = _parse_release(value)
        explicit[name] = bump
    if not explicit:
        raise click.ClickException(
            "No releases requested. Use -r NAME=BUMP or a [releases] table."
        )

    try:
        release_plan = compute_release_plan(dep_graph, explicit)
    except MonobumpError as exc:
        raise click.ClickException(str(exc)) from exc

    if as_json:
        changeset = release_plan.to_changeset(summary)
        click.echo(json.dumps(changeset.model_dump(mode="json"), indent=2))
        return

    step("Release plan")
    for release in release_plan.releases:
        via = f" ← {', '.join(release.dependencies)}" if release.dependencies else ""
        click.echo(f"  {release.name}: {release.type}{via}")
    click.echo(
        f"\n{len(release_plan.releases)} package(s) to release "
        f"({len(release_plan.dependents)} via dependencies)"
    )
