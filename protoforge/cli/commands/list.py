"""List command implementation."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from protoforge.bootstrap import load_registrations_file
from protoforge.exceptions import ConfigurationError
from protoforge.factory.keyed import KeyedFactory
from protoforge.factory.prototype import PrototypeRegistry


def _collect(resource, category, family_factory):
    if resource == "factories":
        return KeyedFactory.get_instance().list_available(category=category)
    if resource == "prototypes":
        return PrototypeRegistry.get_instance().list_available(category=category)

    rows = []
    if family_factory is not None:
        for family in family_factory.families():
            constructors = family_factory.describe_family(family) or {}
            rows.append({"name": str(family), "roles": constructors})
    return rows


@click.command()
@click.argument("resource", type=click.Choice(["factories", "prototypes", "families"]))
@click.option(
    "--bootstrap",
    "-b",
    "bootstrap_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Registration file to load first (repeatable)",
)
@click.option("--category", "-c", help="Filter by category")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "plain"]),
    default="table",
    help="Output format (default: table)",
)
@click.pass_context
def list_cmd(ctx, resource, bootstrap_files, category, output_format):
    """List registered factories, prototypes or families.

    \b
    Examples:
        # List factory bindings from a bootstrap file
        $ protoforge list factories -b registrations.yaml

        # List prototypes as JSON
        $ protoforge list prototypes -b registrations.yaml --format json
    """
    quiet = ctx.obj.get("quiet", False)
    settings = ctx.obj.get("settings")

    files = list(bootstrap_files)
    if settings is not None:
        files.extend(Path(p) for p in settings.bootstrap)

    family_factory = None
    for path in files:
        try:
            result = load_registrations_file(path, families=family_factory)
        except ConfigurationError as e:
            raise click.ClickException(f"{path}: {e}")
        if result.family_factory is not None:
            family_factory = result.family_factory

    rows = _collect(resource, category, family_factory)

    if output_format == "json":
        click.echo(json.dumps(rows, indent=2, default=str))
        return
    if output_format == "plain":
        for row in rows:
            click.echo(row["name"])
        return

    if not rows:
        if not quiet:
            click.echo(f"No {resource} registered.")
        return

    table = Table(title=f"Registered {resource.capitalize()}")
    table.add_column("Name", style="cyan", no_wrap=True)
    if resource == "families":
        table.add_column("Roles", style="green")
        for row in rows:
            roles = ", ".join(f"{role}={ctor}" for role, ctor in row["roles"].items())
            table.add_row(row["name"], roles)
    else:
        table.add_column("Type", style="green")
        table.add_column("Category", style="yellow")
        table.add_column("Description", style="dim")
        for row in rows:
            table.add_row(
                row["name"][:30],
                row["type"][:20],
                (row.get("category") or "")[:15],
                (row.get("description") or row.get("summary") or "")[:50],
            )
    Console().print(table)
